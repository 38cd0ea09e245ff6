from fastapi import APIRouter

from pawrecognition.api.health.router import root_router, router as health_router
from pawrecognition.api.prediction.router import router as prediction_router
from pawrecognition.api.random_dog.router import router as random_dog_router

# Same-origin relay routes
relay_router = APIRouter(prefix="/api")
relay_router.include_router(prediction_router)
relay_router.include_router(random_dog_router)

# Main API router
api_router = APIRouter()
api_router.include_router(root_router)
api_router.include_router(health_router)
api_router.include_router(relay_router)
