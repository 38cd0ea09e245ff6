from typing import Any

from fastapi import status

from pawrecognition.api.core.constants import UNSPLASH_URL_PREFERENCE
from pawrecognition.api.core.exceptions.base import RelayException
from pawrecognition.api.core.messages import MessageCode
from pawrecognition.api.random_dog.schemas import Attribution, RandomDogResponse
from pawrecognition.modules.random_dog.unsplash_client import UnsplashClient
from pawrecognition.utils.logger import get_logger


class RandomDogService:
    """Fetches a random dog photo server-side and returns it embedded."""

    def __init__(self, unsplash_client: UnsplashClient):
        self.unsplash_client = unsplash_client
        self.logger = get_logger(self.__class__.__name__)

    async def get_random_dog(self) -> RandomDogResponse:
        photo = await self.unsplash_client.get_random_photo()

        image_url = select_image_url(photo)
        if not image_url:
            self.logger.error("Unsplash response has no usable image URL")
            raise RelayException(
                MessageCode.UNSPLASH_NO_IMAGE_URL, status.HTTP_502_BAD_GATEWAY
            )

        image = await self.unsplash_client.download_image(image_url)
        self.logger.info(
            "Random dog image fetched",
            photo_id=photo.get("id"),
            media_type=image.media_type,
            size=image.size,
        )

        return RandomDogResponse(
            image=image.data_uri,
            attribution=build_attribution(photo),
        )


def select_image_url(photo: dict[str, Any]) -> str | None:
    urls = photo.get("urls") or {}
    if not isinstance(urls, dict):
        return None
    for size in UNSPLASH_URL_PREFERENCE:
        if urls.get(size):
            return urls[size]
    return None


def _mapping(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _text(mapping: dict[str, Any], key: str) -> str | None:
    value = mapping.get(key)
    return value if isinstance(value, str) else None


def build_attribution(photo: dict[str, Any]) -> Attribution:
    """Photographer credit from an Unsplash photo; malformed parts are dropped."""
    user = _mapping(photo.get("user"))
    return Attribution(
        photographer=_text(user, "name"),
        photographer_url=_text(_mapping(user.get("links")), "html"),
        unsplash_url=_text(_mapping(photo.get("links")), "html"),
    )
