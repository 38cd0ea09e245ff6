"""Conversion of raw image bytes into embedded-data images."""

import asyncio
import io
import mimetypes
import os
from pathlib import Path
from typing import BinaryIO

import aiohttp
from PIL import Image, UnidentifiedImageError

from pawrecognition.core.constants import DEFAULT_TIMEOUT_SECONDS, FALLBACK_MEDIA_TYPE
from pawrecognition.core.errors import ImageReadError, NetworkError
from pawrecognition.core.images import EncodedImage
from pawrecognition.utils.http import (
    TRANSPORT_ERRORS,
    client_timeout,
    http_session,
    is_success,
)
from pawrecognition.utils.logger import get_logger

logger = get_logger(__name__)

ImageInput = bytes | bytearray | memoryview | str | os.PathLike | BinaryIO


def sniff_media_type(data: bytes) -> str | None:
    """Identify the image format from its bytes using Pillow."""
    try:
        with Image.open(io.BytesIO(data)) as image:
            image_format = image.format
    except (UnidentifiedImageError, OSError, ValueError):
        return None
    return Image.MIME.get(image_format) if image_format else None


def guess_media_type(filename: str | os.PathLike | None) -> str | None:
    if not filename:
        return None
    media_type, _ = mimetypes.guess_type(os.fspath(filename))
    return media_type


def _source_name(source: ImageInput) -> str | None:
    if isinstance(source, (str, os.PathLike)):
        return os.fspath(source)
    name = getattr(source, "name", None)
    return name if isinstance(name, str) else None


async def read_image_bytes(source: ImageInput) -> bytes:
    """Read the full contents of ``source`` without blocking the event loop."""
    if isinstance(source, (bytes, bytearray, memoryview)):
        return bytes(source)

    loop = asyncio.get_event_loop()
    try:
        if isinstance(source, (str, os.PathLike)):
            data = await loop.run_in_executor(None, Path(source).read_bytes)
        else:
            data = await loop.run_in_executor(None, source.read)
    except OSError as e:
        logger.warning(f"Image read failed: {e}", source=_source_name(source))
        raise ImageReadError("Failed to read image file") from e

    if not isinstance(data, bytes):
        raise ImageReadError("Image file must be opened in binary mode")
    return data


async def encode(source: ImageInput, media_type: str | None = None) -> EncodedImage:
    """Read ``source`` and embed it as a data URI.

    The declared media type wins. Otherwise the type is sniffed from the
    bytes, then guessed from the file name, then falls back to
    ``application/octet-stream``.
    """
    data = await read_image_bytes(source)
    resolved = (
        media_type
        or sniff_media_type(data)
        or guess_media_type(_source_name(source))
        or FALLBACK_MEDIA_TYPE
    )
    return EncodedImage.from_bytes(data, resolved)


async def fetch_and_encode(
    url: str,
    session: aiohttp.ClientSession | None = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    default_media_type: str | None = None,
) -> EncodedImage:
    """Download ``url`` and embed the body using its declared content type."""
    try:
        async with http_session(session) as http:
            async with http.get(url, timeout=client_timeout(timeout)) as response:
                if not is_success(response.status):
                    raise NetworkError(f"Failed to fetch image: HTTP {response.status}")
                content_type = response.headers.get("Content-Type", "")
                data = await response.read()
    except TRANSPORT_ERRORS as e:
        logger.warning(f"Image download failed: {e}", url=url)
        raise NetworkError("Failed to fetch image") from e

    media_type = content_type.split(";", 1)[0].strip().lower() or default_media_type
    return await encode(data, media_type)
