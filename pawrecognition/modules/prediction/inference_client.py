"""Client for the remote dog breed inference service."""

from typing import Any

import aiohttp
from fastapi import status

from pawrecognition.api.core.exceptions.base import RelayException
from pawrecognition.api.core.messages import MessageCode
from pawrecognition.core.constants import API_KEY_HEADER, PREDICT_PATH
from pawrecognition.utils.http import (
    TRANSPORT_ERRORS,
    client_timeout,
    error_message,
    http_session,
    is_success,
    read_json,
)
from pawrecognition.utils.logger import get_logger
from pawrecognition.utils.settings.inference import InferenceSettings

logger = get_logger(__name__)


class InferenceServiceClient:
    """Forwards prediction requests to the inference service with its credential."""

    def __init__(
        self,
        settings: InferenceSettings,
        session: aiohttp.ClientSession | None = None,
    ):
        if not settings.is_configured:
            logger.error("Inference API configuration missing")
            raise RelayException(
                MessageCode.SERVER_CONFIGURATION_ERROR,
                status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        self.url = settings.INFERENCE_API_URL.rstrip("/")
        self.api_key = settings.INFERENCE_API_KEY
        self.timeout = settings.INFERENCE_TIMEOUT
        self.session = session

    async def predict(self, image: str) -> dict[str, Any]:
        """Send a data URI to ``/predict`` and return the JSON body on success.

        Upstream failures keep their status code; the message is the upstream
        ``error`` field, or ``API error: <status>`` when there is none.
        """
        try:
            async with http_session(self.session) as session:
                async with session.post(
                    f"{self.url}{PREDICT_PATH}",
                    json={"image": image},
                    headers={API_KEY_HEADER: self.api_key},
                    timeout=client_timeout(self.timeout),
                ) as response:
                    body = await read_json(response)
                    response_status = response.status
        except TRANSPORT_ERRORS as e:
            logger.error(f"Inference service request failed: {e}")
            raise RelayException(
                MessageCode.PREDICTION_SERVICE_UNAVAILABLE,
                status.HTTP_502_BAD_GATEWAY,
            )

        if not is_success(response_status):
            logger.warning(
                "Prediction API error", status_code=response_status, body=body
            )
            # Only error statuses are passed through
            relayed_status = (
                response_status
                if response_status >= 400
                else status.HTTP_502_BAD_GATEWAY
            )
            raise RelayException(
                MessageCode.PREDICTION_API_ERROR,
                relayed_status,
                message=error_message(body) or f"API error: {response_status}",
            )

        if not isinstance(body, dict):
            logger.error("Inference service returned a non-JSON body")
            raise RelayException(
                MessageCode.INVALID_UPSTREAM_RESPONSE,
                status.HTTP_502_BAD_GATEWAY,
            )

        return body
