from typing import Annotated

from fastapi import Depends

from pawrecognition.modules.prediction.inference_client import InferenceServiceClient
from pawrecognition.modules.random_dog.service import RandomDogService
from pawrecognition.modules.random_dog.unsplash_client import UnsplashClient
from pawrecognition.utils.settings.inference import (
    InferenceSettings,
    get_inference_settings,
)
from pawrecognition.utils.settings.unsplash import (
    UnsplashSettings,
    get_unsplash_settings,
)

InferenceSettingsDep = Annotated[InferenceSettings, Depends(get_inference_settings)]
UnsplashSettingsDep = Annotated[UnsplashSettings, Depends(get_unsplash_settings)]


async def get_inference_client(
    settings: InferenceSettingsDep,
) -> InferenceServiceClient:
    """Get inference service client; fails with 500 when unconfigured."""
    return InferenceServiceClient(settings)


async def get_random_dog_service(
    settings: UnsplashSettingsDep,
) -> RandomDogService:
    """Get random dog service; fails with 500 when unconfigured."""
    return RandomDogService(UnsplashClient(settings))


InferenceClientDep = Annotated[InferenceServiceClient, Depends(get_inference_client)]
RandomDogServiceDep = Annotated[RandomDogService, Depends(get_random_dog_service)]
