"""Health check endpoints tests."""

import pytest
from fastapi import status
from httpx import AsyncClient

from pawrecognition.utils.settings.inference import (
    InferenceSettings,
    get_inference_settings,
)


@pytest.mark.asyncio
async def test_root_endpoint_returns_message(app, public_client: AsyncClient):
    """Root endpoint mirrors the inference service's health probe shape."""
    response = await public_client.get("/")

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert set(data) == {"message"}
    assert isinstance(data["message"], str)


@pytest.mark.asyncio
async def test_liveness_check(app, public_client: AsyncClient):
    response = await public_client.get("/health/liveness")

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["status"] == "alive"
    assert data["service"] == "paw-recognition"


@pytest.mark.asyncio
async def test_health_check_reports_configured_relays(app, public_client: AsyncClient):
    response = await public_client.get("/health/")

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data == {
        "status": "healthy",
        "inference": "configured",
        "unsplash": "configured",
    }


@pytest.mark.asyncio
async def test_health_check_degraded_without_inference_key(
    app, public_client: AsyncClient
):
    app.dependency_overrides[get_inference_settings] = lambda: InferenceSettings(
        _env_file=None, INFERENCE_API_URL="http://inference", INFERENCE_API_KEY=None
    )

    response = await public_client.get("/health/")

    data = response.json()
    assert data["status"] == "degraded"
    assert data["inference"] == "missing"
    assert data["unsplash"] == "configured"


@pytest.mark.asyncio
async def test_security_headers_present(app, public_client: AsyncClient):
    response = await public_client.get("/")

    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"
    assert "X-Paw-Recognition-Version" in response.headers


@pytest.mark.asyncio
async def test_request_id_is_echoed(app, public_client: AsyncClient):
    response = await public_client.get("/", headers={"X-Request-ID": "abc123"})

    assert response.headers["X-Request-ID"] == "abc123"


@pytest.mark.asyncio
async def test_unknown_route_returns_error_body(app, public_client: AsyncClient):
    response = await public_client.get("/api/unknown")

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert "error" in response.json()
