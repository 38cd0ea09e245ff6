"""Global test configuration and fixtures for the Paw Recognition relay and client."""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from asgi_lifespan import LifespanManager
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from pawrecognition.core.images import EncodedImage
from pawrecognition.utils.settings.inference import (
    InferenceSettings,
    get_inference_settings,
)
from pawrecognition.utils.settings.unsplash import (
    UnsplashSettings,
    get_unsplash_settings,
)
from tests.utils.constants import TEST_INFERENCE_KEY, TEST_UNSPLASH_KEY
from tests.utils.fake_services import FakeService, make_image_bytes, start_fake_service


# Upstream fakes
@pytest_asyncio.fixture
async def fake_inference() -> AsyncGenerator[FakeService, None]:
    """Stand-in for the dog breed inference service."""
    service = await start_fake_service()
    yield service
    await service.server.close()


@pytest_asyncio.fixture
async def fake_unsplash() -> AsyncGenerator[FakeService, None]:
    """Stand-in for both the Unsplash API and its image CDN."""
    service = await start_fake_service()
    yield service
    await service.server.close()


# Settings
@pytest.fixture
def inference_settings(fake_inference: FakeService) -> InferenceSettings:
    return InferenceSettings(
        _env_file=None,
        INFERENCE_API_URL=fake_inference.url,
        INFERENCE_API_KEY=TEST_INFERENCE_KEY,
        INFERENCE_TIMEOUT=2,
    )


@pytest.fixture
def unsplash_settings(fake_unsplash: FakeService) -> UnsplashSettings:
    return UnsplashSettings(
        _env_file=None,
        UNSPLASH_ACCESS_KEY=TEST_UNSPLASH_KEY,
        UNSPLASH_API_URL=fake_unsplash.url,
        UNSPLASH_TIMEOUT=2,
    )


# Application
@pytest_asyncio.fixture
async def app(
    inference_settings: InferenceSettings, unsplash_settings: UnsplashSettings
) -> AsyncGenerator[FastAPI, None]:
    """Relay application wired to the fake upstream services."""
    from pawrecognition.main import app

    app.dependency_overrides[get_inference_settings] = lambda: inference_settings
    app.dependency_overrides[get_unsplash_settings] = lambda: unsplash_settings

    async with LifespanManager(app):
        yield app

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def public_client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create HTTP client for the relay endpoints."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test-paw-recognition",
    ) as ac:
        yield ac


# Images
@pytest.fixture
def png_bytes() -> bytes:
    return make_image_bytes("PNG")


@pytest.fixture
def jpeg_bytes() -> bytes:
    return make_image_bytes("JPEG")


@pytest.fixture
def encoded_png(png_bytes: bytes) -> EncodedImage:
    return EncodedImage.from_bytes(png_bytes, "image/png")
