"""Fetches random dog images through the relay."""

import aiohttp
from pydantic import ValidationError

from pawrecognition.api.random_dog.schemas import RandomDogResponse
from pawrecognition.core.constants import DEFAULT_TIMEOUT_SECONDS, RELAY_RANDOM_DOG_PATH
from pawrecognition.core.errors import ApiError, NetworkError
from pawrecognition.utils.http import (
    TRANSPORT_ERRORS,
    client_timeout,
    error_message,
    http_session,
    is_success,
    read_json,
)
from pawrecognition.utils.logger import get_logger

logger = get_logger(__name__)


class RandomDogClient:
    """Client for the relay's ``/api/random-dog`` route.

    The stock-photo provider is never called directly: the relay holds the
    provider credential and downloads the photo server-side.
    """

    def __init__(
        self,
        relay_url: str,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        session: aiohttp.ClientSession | None = None,
    ):
        self.relay_url = relay_url.rstrip("/")
        self.timeout = timeout
        self.session = session

    async def get_random_dog(self) -> RandomDogResponse:
        url = f"{self.relay_url}{RELAY_RANDOM_DOG_PATH}"
        try:
            async with http_session(self.session) as session:
                async with session.get(
                    url, timeout=client_timeout(self.timeout)
                ) as response:
                    status = response.status
                    body = await read_json(response)
        except TRANSPORT_ERRORS as e:
            logger.error(f"Random dog request failed: {e}", url=url)
            raise NetworkError("Failed to fetch random image from server") from e

        if not is_success(status):
            logger.warning(
                "Random dog relay error", status_code=status, error=error_message(body)
            )
            raise NetworkError("Failed to fetch random image from server")

        message = error_message(body)
        if message:
            raise ApiError(message)

        try:
            return RandomDogResponse.model_validate(body)
        except ValidationError as e:
            raise ApiError("Invalid response from random image relay") from e
