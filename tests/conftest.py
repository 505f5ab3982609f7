"""
Pytest configuration and fixtures for planner tests.

Provides reusable fixtures for:
- Default buildings of each roof shape
- Engines with default parameters
- A planner service wired to an in-memory sink
- An API test client bound to that service
"""

import pytest

from planner.config import Settings
from planner.core.polygon import PolygonDrawer
from planner.core.registry import create_default_registry
from planner.core.rooftop import RooftopObjectEngine
from planner.models import FlatBuilding, HippedBuilding, PlannerParams, SaddleBuilding
from planner.services.planner_service import MemorySink, PlannerService


# =============================================================================
# MODEL FIXTURES
# =============================================================================

@pytest.fixture
def params() -> PlannerParams:
    return PlannerParams()


@pytest.fixture
def flat() -> FlatBuilding:
    """10 x 5 x 10 flat building at the origin."""
    return FlatBuilding()


@pytest.fixture
def saddle() -> SaddleBuilding:
    return SaddleBuilding()


@pytest.fixture
def hipped() -> HippedBuilding:
    return HippedBuilding()


@pytest.fixture
def registry():
    return create_default_registry()


# =============================================================================
# ENGINE FIXTURES
# =============================================================================

@pytest.fixture
def drawer(params) -> PolygonDrawer:
    return PolygonDrawer(params)


@pytest.fixture
def objects(params) -> RooftopObjectEngine:
    return RooftopObjectEngine(params)


# =============================================================================
# SERVICE FIXTURES
# =============================================================================

@pytest.fixture
def settings() -> Settings:
    return Settings(google_maps_api_key="test-key")


@pytest.fixture
def sink() -> MemorySink:
    return MemorySink()


@pytest.fixture
def service(settings, sink) -> PlannerService:
    return PlannerService(settings=settings, sink=sink)


@pytest.fixture
def client(service, sink):
    """API client bound to a fresh service."""
    from fastapi.testclient import TestClient
    from planner.api.main import app
    from planner.api.routes import get_service, get_sink

    app.dependency_overrides[get_service] = lambda: service
    app.dependency_overrides[get_sink] = lambda: sink
    yield TestClient(app)
    app.dependency_overrides.clear()
