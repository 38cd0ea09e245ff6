"""Client for the Unsplash random photo API."""

from typing import Any

import aiohttp
from fastapi import status

from pawrecognition.api.core.constants import (
    UNSPLASH_ACCEPT_VERSION,
    UNSPLASH_RANDOM_PHOTO_PATH,
)
from pawrecognition.api.core.exceptions.base import RelayException
from pawrecognition.api.core.messages import MessageCode
from pawrecognition.client.encoding import fetch_and_encode
from pawrecognition.core.constants import DEFAULT_IMAGE_CONTENT_TYPE
from pawrecognition.core.errors import NetworkError
from pawrecognition.core.images import EncodedImage
from pawrecognition.utils.http import (
    TRANSPORT_ERRORS,
    client_timeout,
    http_session,
    is_success,
    read_json,
)
from pawrecognition.utils.logger import get_logger
from pawrecognition.utils.settings.unsplash import UnsplashSettings

logger = get_logger(__name__)


class UnsplashClient:
    def __init__(
        self,
        settings: UnsplashSettings,
        session: aiohttp.ClientSession | None = None,
    ):
        if not settings.UNSPLASH_ACCESS_KEY:
            logger.error("UNSPLASH_ACCESS_KEY is not configured")
            raise RelayException(
                MessageCode.SERVER_CONFIGURATION_ERROR,
                status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        self.url = settings.UNSPLASH_API_URL.rstrip("/")
        self.access_key = settings.UNSPLASH_ACCESS_KEY
        self.query = settings.UNSPLASH_QUERY
        self.timeout = settings.UNSPLASH_TIMEOUT
        self.session = session

    async def get_random_photo(self) -> dict[str, Any]:
        """Look up one random photo matching the configured query."""
        try:
            async with http_session(self.session) as session:
                async with session.get(
                    f"{self.url}{UNSPLASH_RANDOM_PHOTO_PATH}",
                    params={"query": self.query},
                    headers={
                        "Accept-Version": UNSPLASH_ACCEPT_VERSION,
                        "Authorization": f"Client-ID {self.access_key}",
                    },
                    timeout=client_timeout(self.timeout),
                ) as response:
                    if not is_success(response.status):
                        logger.error(
                            "Unsplash API error",
                            status_code=response.status,
                            reason=response.reason,
                        )
                        raise RelayException(
                            MessageCode.UNSPLASH_FETCH_FAILED,
                            status.HTTP_502_BAD_GATEWAY,
                        )
                    photo = await read_json(response)
        except TRANSPORT_ERRORS as e:
            logger.error(f"Unsplash request failed: {e}")
            raise RelayException(
                MessageCode.UNSPLASH_FETCH_FAILED, status.HTTP_502_BAD_GATEWAY
            )

        if not isinstance(photo, dict):
            raise RelayException(
                MessageCode.UNSPLASH_FETCH_FAILED, status.HTTP_502_BAD_GATEWAY
            )
        return photo

    async def download_image(self, image_url: str) -> EncodedImage:
        """Download a photo and embed it with its declared content type."""
        try:
            return await fetch_and_encode(
                image_url,
                session=self.session,
                timeout=self.timeout,
                default_media_type=DEFAULT_IMAGE_CONTENT_TYPE,
            )
        except NetworkError as e:
            logger.error(f"Unsplash image download failed: {e.message}", url=image_url)
            raise RelayException(
                MessageCode.IMAGE_DOWNLOAD_FAILED, status.HTTP_502_BAD_GATEWAY
            )
