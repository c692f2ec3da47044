"""
Basic test to verify the project setup is working correctly.
"""

import pytest
from fastapi.testclient import TestClient

from foodlocator.config.settings import Settings
from foodlocator.core.dependencies import ServiceContainer
from foodlocator.main import create_app


def test_app_creation(test_settings):
    """Test that the FastAPI app can be created successfully."""
    app = create_app(test_settings)
    assert app is not None
    assert app.title == "Healthy Food Locator"


def test_root_endpoint(test_settings, transport):
    """Test the root endpoint returns expected response."""
    app = create_app(test_settings, ServiceContainer(test_settings, transport=transport))
    with TestClient(app) as client:
        response = client.get("/")

    assert response.status_code == 200
    data = response.json()
    assert "message" in data
    assert "version" in data
    assert data["status"] == "running"


def test_default_settings():
    """Defaults match the documented search behaviour."""
    settings = Settings()
    assert settings.search.default_place_name == "Sukabumi, Indonesia"
    assert settings.foursquare.query == "healthy food"
    assert settings.foursquare.result_limit == 10
    assert settings.map.zoom == 13


@pytest.mark.asyncio
async def test_container_requires_initialization(test_settings):
    container = ServiceContainer(test_settings)
    assert container.initialized is False
    with pytest.raises(RuntimeError):
        container.get_orchestrator()
