"""
Pytest configuration and fixtures.

Provides shared fixtures for testing.
"""

import pytest
from fastapi.testclient import TestClient

from polycheck_api.main import app
from polycheck_api.services import GradingService


@pytest.fixture
def client() -> TestClient:
    """FastAPI test client"""
    return TestClient(app)


@pytest.fixture
def service() -> GradingService:
    """Grading service with simplified answers required and the expansion hint on"""
    return GradingService(require_simplified=True, expansion_hint=True)


@pytest.fixture
def api_prefix() -> str:
    """Prefix of the versioned routes"""
    from polycheck_api.core import settings
    return settings.API_PREFIX
