"""Health check endpoints for probes and monitoring."""

from fastapi import APIRouter

from pawrecognition.api.core.constants import SERVICE_NAME
from pawrecognition.api.core.dependencies import (
    InferenceSettingsDep,
    UnsplashSettingsDep,
)
from pawrecognition.api.core.messages import (
    MessageCode,
    MessageResponse,
    get_default_message,
)

root_router = APIRouter()
router = APIRouter(prefix="/health", tags=["health"])


@root_router.get("/", response_model=MessageResponse)
async def root() -> MessageResponse:
    """Health probe with the same shape as the inference service's root."""
    return MessageResponse(message=get_default_message(MessageCode.SERVICE_RUNNING))


@router.get("/")
async def health_check(
    inference_settings: InferenceSettingsDep,
    unsplash_settings: UnsplashSettingsDep,
) -> dict:
    """Report whether each relay has the configuration it needs."""
    inference = "configured" if inference_settings.is_configured else "missing"
    unsplash = "configured" if unsplash_settings.UNSPLASH_ACCESS_KEY else "missing"
    overall = "healthy" if inference == unsplash == "configured" else "degraded"

    return {
        "status": overall,
        "inference": inference,
        "unsplash": unsplash,
    }


@router.get("/liveness")
async def liveness_check() -> dict:
    return {"status": "alive", "service": SERVICE_NAME}
