import uvicorn
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pawrecognition.api.core.exceptions.base import register_exception_handlers
from pawrecognition.api.core.middleware.logging import logging_middleware
from pawrecognition.api.core.middleware.security import (
    PayloadSizeMiddleware,
    SecurityHeadersMiddleware,
)
from pawrecognition.api.router import api_router
from pawrecognition.utils.logger import setup_logging
from pawrecognition.utils.settings.app import AppSettings
from pawrecognition.utils.settings.inference import InferenceSettings
from pawrecognition.utils.settings.unsplash import UnsplashSettings


app_settings = AppSettings()
is_production = app_settings.is_production


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger = setup_logging(is_production, debug=app_settings.DEBUG)
    app_settings.validate_prod()
    logger.info("Starting Paw Recognition relay...")

    # Missing credentials degrade the affected route to a 500, not the app
    if not InferenceSettings().is_configured:
        logger.warning("INFERENCE_API_URL or INFERENCE_API_KEY is not set")
    if not UnsplashSettings().UNSPLASH_ACCESS_KEY:
        logger.warning("UNSPLASH_ACCESS_KEY is not set")

    yield

    logger.info("Shutting down Paw Recognition relay...")


app = FastAPI(
    title="Paw Recognition Relay",
    description="Same-origin relay for dog breed prediction and random dog images",
    version=app_settings.API_VERSION,
    lifespan=lifespan,
    docs_url=None if is_production else "/docs",
    redoc_url=None if is_production else "/redoc",
    openapi_url=None if is_production else "/openapi.json",
)

register_exception_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=app_settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)
app.add_middleware(SecurityHeadersMiddleware, is_production=is_production)
app.add_middleware(
    PayloadSizeMiddleware, max_request_size=app_settings.MAX_REQUEST_SIZE
)
app.middleware("http")(logging_middleware)

app.include_router(api_router)


def _run(reload: bool) -> None:
    uvicorn.run(
        "pawrecognition.main:app",
        host="0.0.0.0",
        port=8000,
        reload=reload,
        access_log=False,
    )


def run_dev_server():
    """Run development server with auto-reload."""
    _run(reload=True)


def run_prod_server():
    _run(reload=False)
