from fastapi import APIRouter

from pawrecognition.api.core.dependencies import RandomDogServiceDep
from pawrecognition.api.core.messages import ErrorResponse
from pawrecognition.api.random_dog.schemas import RandomDogResponse

router = APIRouter(tags=["random-dog"])


@router.get(
    "/random-dog",
    response_model=RandomDogResponse,
    response_model_exclude_none=True,
    responses={500: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
)
async def random_dog(random_dog_service: RandomDogServiceDep) -> RandomDogResponse:
    """Fetch a random dog photo from Unsplash, embedded as a data URI."""
    return await random_dog_service.get_random_dog()
