from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from pawrecognition.api.core.dependencies import InferenceClientDep
from pawrecognition.api.core.exceptions.base import RelayException
from pawrecognition.api.core.messages import ErrorResponse, MessageCode
from pawrecognition.api.prediction.schemas import PredictImageRequest, PredictionResponse

router = APIRouter(tags=["prediction"])


@router.post(
    "/predict",
    response_model=PredictionResponse,
    responses={
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
)
async def predict(
    inference_client: InferenceClientDep,
    payload: PredictImageRequest | None = None,
) -> JSONResponse:
    """Relay a prediction request to the inference service.

    The caller sends no credential; the relay attaches its own. Upstream
    failures come back with the upstream status code.
    """
    if payload is None or not payload.image:
        raise RelayException(MessageCode.NO_IMAGE_PROVIDED, status.HTTP_400_BAD_REQUEST)

    body = await inference_client.predict(payload.image)
    return JSONResponse(content=body)
