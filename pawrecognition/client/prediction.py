"""Prediction client for the inference service and its relay."""

import os
from enum import Enum
from typing import Any

import aiohttp
from pydantic import ValidationError

from pawrecognition.api.prediction.schemas import PredictionResponse
from pawrecognition.client.models import PredictionResult
from pawrecognition.client.sources import encode_upload_file
from pawrecognition.client.validation import validate_encoded_image
from pawrecognition.core.constants import (
    API_KEY_HEADER,
    DEFAULT_TIMEOUT_SECONDS,
    PREDICT_PATH,
    RELAY_PREDICT_PATH,
)
from pawrecognition.core.errors import (
    ApiError,
    AuthError,
    NetworkError,
    PawRecognitionError,
    RateLimitError,
)
from pawrecognition.core.images import EncodedImage
from pawrecognition.utils.http import (
    TRANSPORT_ERRORS,
    client_timeout,
    error_message,
    http_session,
    is_success,
    read_json,
)
from pawrecognition.utils.logger import get_logger
from pawrecognition.utils.settings.client import ClientSettings

logger = get_logger(__name__)

INVALID_RESPONSE_MESSAGE = "Invalid response from prediction service"
NO_PREDICTIONS_MESSAGE = "No predictions returned"
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred"


class SubmissionMode(str, Enum):
    DIRECT = "direct"  # straight to the inference service, with credential
    RELAYED = "relayed"  # through the same-origin relay, without credential


def raise_for_status(status: int, body: Any) -> None:
    """Map an inference service status code onto the error taxonomy."""
    if status == 429:
        raise RateLimitError()
    if status in (401, 403):
        raise AuthError()
    if not is_success(status):
        raise ApiError(
            error_message(body) or f"HTTP error! status: {status}",
            status_code=status,
        )


def parse_prediction_body(body: Any) -> PredictionResult:
    """Turn a 2xx body into a result; an ``error`` field wins over predictions."""
    if not isinstance(body, dict):
        raise ApiError(INVALID_RESPONSE_MESSAGE)

    message = error_message(body)
    if message:
        raise ApiError(message)

    try:
        response = PredictionResponse.model_validate(body)
    except ValidationError as e:
        logger.warning("Prediction body failed validation", errors=e.error_count())
        raise ApiError(INVALID_RESPONSE_MESSAGE) from e

    if not response.predictions:
        raise ApiError(NO_PREDICTIONS_MESSAGE)
    return PredictionResult.success(response.predictions)


class PredictionClient:
    """Submits encoded images for classification.

    ``predict`` never raises: every failure comes back as a
    ``PredictionResult`` carrying an error message. Nothing is retried.
    """

    def __init__(
        self,
        base_url: str,
        mode: SubmissionMode = SubmissionMode.RELAYED,
        api_key: str | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        session: aiohttp.ClientSession | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.mode = SubmissionMode(mode)
        self.api_key = api_key
        self.timeout = timeout
        self.session = session

        if self.mode == SubmissionMode.DIRECT and not api_key:
            logger.warning("Direct mode without an API key; requests will be rejected")

    @classmethod
    def from_settings(
        cls,
        settings: ClientSettings | None = None,
        mode: SubmissionMode = SubmissionMode.RELAYED,
        session: aiohttp.ClientSession | None = None,
    ) -> "PredictionClient":
        settings = settings or ClientSettings()
        if mode == SubmissionMode.DIRECT:
            if not settings.INFERENCE_API_URL:
                raise ValueError("INFERENCE_API_URL must be set for direct mode")
            return cls(
                settings.INFERENCE_API_URL,
                mode=mode,
                api_key=settings.INFERENCE_API_KEY,
                timeout=settings.REQUEST_TIMEOUT,
                session=session,
            )
        return cls(
            settings.RELAY_URL,
            mode=mode,
            timeout=settings.REQUEST_TIMEOUT,
            session=session,
        )

    @property
    def predict_url(self) -> str:
        path = PREDICT_PATH if self.mode == SubmissionMode.DIRECT else RELAY_PREDICT_PATH
        return f"{self.base_url}{path}"

    def _headers(self) -> dict[str, str]:
        if self.mode == SubmissionMode.DIRECT and self.api_key:
            return {API_KEY_HEADER: self.api_key}
        return {}

    async def predict(self, image: EncodedImage | str) -> PredictionResult:
        """Validate ``image`` and submit it, returning predictions or an error."""
        try:
            encoded = validate_encoded_image(image)
            status, body = await self._submit(encoded)
            raise_for_status(status, body)
            return parse_prediction_body(body)
        except PawRecognitionError as e:
            logger.warning(
                "Prediction failed", error=e.message, error_type=type(e).__name__
            )
            return PredictionResult.failure(e.message)
        except Exception:
            logger.exception("Unexpected prediction error")
            return PredictionResult.failure(UNEXPECTED_ERROR_MESSAGE)

    async def predict_file(
        self, path: str | os.PathLike, content_type: str | None = None
    ) -> PredictionResult:
        """Validate a local image file, encode it and submit it."""
        try:
            encoded = await encode_upload_file(path, content_type)
        except PawRecognitionError as e:
            logger.warning("Image file rejected", error=e.message, path=os.fspath(path))
            return PredictionResult.failure(e.message)

        return await self.predict(encoded)

    async def check_health(self) -> dict:
        """Probe ``GET /``. Raises ``NetworkError`` or ``ApiError`` on failure."""
        try:
            async with http_session(self.session) as session:
                async with session.get(
                    f"{self.base_url}/", timeout=client_timeout(self.timeout)
                ) as response:
                    status = response.status
                    body = await read_json(response)
        except TRANSPORT_ERRORS as e:
            logger.error(f"Health check error: {e}")
            raise NetworkError("API health check failed") from e

        if not is_success(status) or not isinstance(body, dict):
            raise ApiError("API health check failed", status_code=status)
        return body

    async def _submit(self, image: EncodedImage) -> tuple[int, Any]:
        try:
            async with http_session(self.session) as session:
                async with session.post(
                    self.predict_url,
                    json={"image": image.data_uri},
                    headers=self._headers(),
                    timeout=client_timeout(self.timeout),
                ) as response:
                    return response.status, await read_json(response)
        except TRANSPORT_ERRORS as e:
            logger.error(f"Prediction request failed: {e}", url=self.predict_url)
            raise NetworkError("Failed to reach prediction service") from e
