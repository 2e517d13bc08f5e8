"""
Service exceptions and error handling.

Defines custom exceptions and error handlers for consistent error responses.
"""

from typing import Any, Dict, Optional

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from .config import settings
from .logging import get_logger, request_id_var

logger = get_logger(__name__)


# Custom Exceptions

class PolycheckError(Exception):
    """Base exception for grading service errors"""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class AnswerParseError(PolycheckError):
    """Raised when an expression cannot be parsed (unbalanced delimiters)"""

    def __init__(self, expression: str, error: str, position: Optional[int] = None):
        details: Dict[str, Any] = {"expression": expression, "error": error}
        if position is not None:
            details["position"] = position
        super().__init__(
            message=f"Could not parse expression: {error}",
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            details=details
        )


class UnsupportedAnswerTypeError(PolycheckError):
    """Raised when no evaluator is registered for an answer type"""

    def __init__(self, answer_type: str, supported: list[str]):
        super().__init__(
            message=f"Unsupported answer type '{answer_type}'",
            status_code=status.HTTP_400_BAD_REQUEST,
            details={"answer_type": answer_type, "supported": supported}
        )


class GradingError(PolycheckError):
    """Raised when answer grading fails"""

    def __init__(self, answer_type: str, error: str):
        super().__init__(
            message=f"Failed to grade '{answer_type}' answer: {error}",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details={"answer_type": answer_type, "error": error}
        )


# Error Responses

def error_body(
    error_type: str,
    message: str,
    details: Optional[Any] = None,
) -> Dict[str, Any]:
    """
    JSON body shared by every error response.

    ``{"error": {"type", "message", "details"?, "request_id"}}``; the request
    id matches the ``X-Request-ID`` response header and the log records.
    """
    body: Dict[str, Any] = {"type": error_type, "message": message}
    if details is not None:
        body["details"] = details
    body["request_id"] = request_id_var.get()
    return {"error": body}


def create_error_response(
    error: Exception,
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
    include_details: bool = True
) -> JSONResponse:
    """Log a service error and turn it into a JSON response"""
    details = error.details if isinstance(error, PolycheckError) else {}

    log = logger.error if status_code >= 500 else logger.warning
    log(
        f"Error occurred: {error}",
        extra_data={
            "error_type": error.__class__.__name__,
            "status_code": status_code,
            **details
        },
        exc_info=status_code >= 500
    )

    return JSONResponse(
        status_code=status_code,
        content=error_body(
            error.__class__.__name__,
            str(error),
            details if include_details and isinstance(error, PolycheckError) else None,
        )
    )


def jsonable_errors(exc: RequestValidationError) -> list[Dict[str, Any]]:
    """Request validation errors without the non-serializable ``ctx`` payloads"""
    return [
        {key: value for key, value in error.items() if key != "ctx"}
        for error in exc.errors()
    ]


# Exception Handlers

async def polycheck_error_handler(request: Request, exc: PolycheckError) -> JSONResponse:
    """Handle PolycheckError exceptions"""
    return create_error_response(exc, exc.status_code)


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle HTTPException exceptions (unknown routes, wrong methods)"""
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body("HTTPException", str(exc.detail))
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle request validation errors (missing fields, over-long answers)"""
    errors = jsonable_errors(exc)
    logger.warning(
        "Validation error",
        extra_data={"path": request.url.path, "errors": errors}
    )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=error_body("ValidationError", "Request validation failed", errors)
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected errors; the message is only exposed with DEBUG on"""
    logger.exception(
        "Unexpected error occurred",
        extra_data={"path": request.url.path}
    )

    message = str(exc) if settings.DEBUG else "An internal error occurred"

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("InternalServerError", message)
    )


def register_error_handlers(app):
    """Register error handlers with FastAPI app"""
    app.add_exception_handler(PolycheckError, polycheck_error_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)
