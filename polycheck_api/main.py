"""
FastAPI backend for Polycheck.

Exposes the polynomial parsers, the factored-form comparison and the answer
evaluators over HTTP:
- Service layer for grading logic
- Structured logging
- Consistent JSON error responses
- Dependency injection
"""

import uuid
from contextlib import asynccontextmanager
from typing import List

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field, field_validator

from polycheck.answer import get_registered_types
from polycheck.math import FactoredPolynomial, SimplifiedPolynomial

from .core import (
    settings,
    setup_logging,
    get_logger,
    register_error_handlers,
    request_id_var,
)
from .models import AnswerFeedback, AnswerSubmission, check_answer_length
from .services import GradingService, get_grading_service

# Setup logging
setup_logging()
logger = get_logger(__name__)


# Lifecycle management
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management"""
    logger.info(
        "Starting Polycheck API",
        extra_data={
            "environment": settings.ENVIRONMENT,
            "debug": settings.DEBUG
        }
    )
    yield
    logger.info("Shutting down Polycheck API")


app = FastAPI(
    title=settings.APP_NAME,
    description="REST API for parsing and grading typed polynomial answers",
    version=settings.APP_VERSION,
    debug=settings.DEBUG,
    lifespan=lifespan
)

register_error_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
    allow_methods=settings.CORS_ALLOW_METHODS,
    allow_headers=settings.CORS_ALLOW_HEADERS,
)

router = APIRouter(prefix=settings.API_PREFIX)


@app.middleware("http")
async def bind_request_id(request: Request, call_next):
    """Tag log records and the response with the request id"""
    request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
    token = request_id_var.set(request_id)
    try:
        response = await call_next(request)
    finally:
        request_id_var.reset(token)
    response.headers["X-Request-ID"] = request_id
    return response


# API Request/Response Models
class ExpressionRequest(BaseModel):
    """An expression to parse"""
    latex: str = Field(..., description="Expression in LaTeX-like answer notation")

    @field_validator("latex")
    @classmethod
    def validate_length(cls, v: str) -> str:
        return check_answer_length(v)


class CompareRequest(BaseModel):
    """Two factored expressions to compare"""
    first: str
    second: str

    @field_validator("first", "second")
    @classmethod
    def validate_length(cls, v: str) -> str:
        return check_answer_length(v)


class CompareResponse(BaseModel):
    """Factored comparison result"""
    equal: bool


class PolynomialResponse(SimplifiedPolynomial):
    """Parsed polynomial with its rendering"""
    latex: str

    @classmethod
    def from_domain(cls, polynomial: SimplifiedPolynomial) -> "PolynomialResponse":
        return cls(
            variable=polynomial.variable,
            terms=polynomial.terms,
            is_simplified=polynomial.is_simplified,
            latex=polynomial.to_latex(),
        )


class FactoredPolynomialResponse(FactoredPolynomial):
    """Parsed factored polynomial with its rendering"""
    latex: str

    @classmethod
    def from_domain(cls, factored: FactoredPolynomial) -> "FactoredPolynomialResponse":
        return cls(factors=factored.factors, latex=factored.to_latex())


# API Routes

@app.get("/")
async def read_root():
    """API root endpoint"""
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "endpoints": {
            "parse": f"{settings.API_PREFIX}/polynomials/parse",
            "parse_factored": f"{settings.API_PREFIX}/polynomials/factored/parse",
            "compare_factored": f"{settings.API_PREFIX}/polynomials/factored/compare",
            "grade": f"{settings.API_PREFIX}/grade",
            "answer_types": f"{settings.API_PREFIX}/answer-types",
            "health": "/health"
        }
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT
    }


@router.post("/polynomials/parse", response_model=PolynomialResponse)
async def parse_polynomial(
    request: ExpressionRequest,
    service: GradingService = Depends(get_grading_service)
):
    """Parse an expanded polynomial"""
    return PolynomialResponse.from_domain(service.parse_polynomial(request.latex))


@router.post("/polynomials/factored/parse", response_model=FactoredPolynomialResponse)
async def parse_factored_polynomial(
    request: ExpressionRequest,
    service: GradingService = Depends(get_grading_service)
):
    """Parse a factored polynomial"""
    return FactoredPolynomialResponse.from_domain(service.parse_factored(request.latex))


@router.post("/polynomials/factored/compare", response_model=CompareResponse)
async def compare_factored_polynomials(
    request: CompareRequest,
    service: GradingService = Depends(get_grading_service)
):
    """Compare two factored polynomials by factors and powers"""
    return CompareResponse(equal=service.compare_factored(request.first, request.second))


@router.post("/grade", response_model=AnswerFeedback)
def grade_answer(
    submission: AnswerSubmission,
    service: GradingService = Depends(get_grading_service)
):
    """Grade a typed answer"""
    return service.grade(submission)


@router.get("/answer-types", response_model=List[str])
async def list_answer_types():
    """List answer types with a registered evaluator"""
    return get_registered_types()


app.include_router(router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "polycheck_api.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )
