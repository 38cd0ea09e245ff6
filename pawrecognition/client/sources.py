"""Image source adapter: upload, camera and random stock photo."""

import asyncio
import os

from pawrecognition.client.camera import CameraCapture, DeviceFactory
from pawrecognition.client.encoding import (
    guess_media_type,
    read_image_bytes,
    sniff_media_type,
)
from pawrecognition.client.models import ImageAcquisition, ImageSource
from pawrecognition.client.random_dog import RandomDogClient
from pawrecognition.client.validation import validate_media_type, validate_size
from pawrecognition.core.constants import MAX_IMAGE_SIZE_BYTES
from pawrecognition.core.errors import CameraError, ImageReadError, PawRecognitionError
from pawrecognition.core.images import EncodedImage
from pawrecognition.utils.logger import get_logger

logger = get_logger(__name__)

RANDOM_IMAGE_FAILED_MESSAGE = "Failed to load random dog image"
CAMERA_UNAVAILABLE_MESSAGE = "No camera available"
CAMERA_BUSY_MESSAGE = "Camera is already starting"


async def encode_upload_file(
    path: str | os.PathLike,
    content_type: str | None = None,
    max_size_bytes: int = MAX_IMAGE_SIZE_BYTES,
) -> EncodedImage:
    """Validate a local file by type and size, then read and encode it.

    The type is the declared one, else guessed from the file name, else
    sniffed from the contents. The size comes from the file's metadata, so
    an oversized file is rejected without being read.
    """
    declared = content_type or guess_media_type(path)
    if declared:
        validate_media_type(declared)

    loop = asyncio.get_running_loop()
    try:
        stat = await loop.run_in_executor(None, os.stat, path)
    except OSError as e:
        raise ImageReadError("Failed to read image file") from e
    validate_size(stat.st_size, max_size_bytes)

    data = await read_image_bytes(path)
    media_type = validate_media_type(declared or sniff_media_type(data))
    return EncodedImage.from_bytes(data, media_type)


async def encode_upload_bytes(
    data: bytes,
    content_type: str | None,
    filename: str | None = None,
    max_size_bytes: int = MAX_IMAGE_SIZE_BYTES,
) -> EncodedImage:
    media_type = validate_media_type(
        content_type or guess_media_type(filename) or sniff_media_type(data)
    )
    validate_size(len(data), max_size_bytes)
    return EncodedImage.from_bytes(data, media_type)


class ImageSourceAdapter:
    """Produces one encoded image per acquisition, whatever the source.

    Every method returns an ``ImageAcquisition``; failures are reported in its
    ``error`` field. At most one camera is held at a time, and it is released
    before any other acquisition starts.
    """

    def __init__(
        self,
        random_dog_client: RandomDogClient | None = None,
        open_camera: DeviceFactory | None = None,
        max_size_bytes: int = MAX_IMAGE_SIZE_BYTES,
    ):
        self.random_dog_client = random_dog_client
        self.open_camera = open_camera
        self.max_size_bytes = max_size_bytes
        self._camera: CameraCapture | None = None

    @property
    def camera_active(self) -> bool:
        return self._camera is not None and self._camera.is_active

    async def from_file(
        self, path: str | os.PathLike, content_type: str | None = None
    ) -> ImageAcquisition:
        await self.cancel_camera()
        try:
            image = await encode_upload_file(path, content_type, self.max_size_bytes)
        except PawRecognitionError as e:
            logger.warning("Upload rejected", error=e.message, path=os.fspath(path))
            return ImageAcquisition(source=ImageSource.UPLOAD, error=e.message)
        return ImageAcquisition(source=ImageSource.UPLOAD, image=image)

    async def from_bytes(
        self,
        data: bytes,
        content_type: str | None,
        filename: str | None = None,
    ) -> ImageAcquisition:
        await self.cancel_camera()
        try:
            image = await encode_upload_bytes(
                data, content_type, filename, self.max_size_bytes
            )
        except PawRecognitionError as e:
            logger.warning("Upload rejected", error=e.message, filename=filename)
            return ImageAcquisition(source=ImageSource.UPLOAD, error=e.message)
        return ImageAcquisition(source=ImageSource.UPLOAD, image=image)

    async def start_camera(self) -> str | None:
        """Open the camera for preview. Returns an error message on failure."""
        if self.camera_active:
            return None
        if self._camera is not None and self._camera.is_starting:
            return CAMERA_BUSY_MESSAGE
        if self.open_camera is None:
            return CAMERA_UNAVAILABLE_MESSAGE

        # Held while opening so cancel_camera() can abandon the open
        camera = self._camera = CameraCapture(self.open_camera)
        try:
            await camera.start()
        except CameraError as e:
            return e.message
        finally:
            if not camera.is_active and self._camera is camera:
                self._camera = None
        return None

    async def from_camera(self) -> ImageAcquisition:
        """Capture the current frame, opening the camera first if needed."""
        error = await self.start_camera()
        if error:
            return ImageAcquisition(source=ImageSource.CAMERA, error=error)

        camera, self._camera = self._camera, None
        try:
            image = await camera.capture()
        except CameraError as e:
            return ImageAcquisition(source=ImageSource.CAMERA, error=e.message)
        return ImageAcquisition(source=ImageSource.CAMERA, image=image)

    async def cancel_camera(self) -> None:
        camera, self._camera = self._camera, None
        if camera is not None:
            await camera.cancel()

    async def from_random(self) -> ImageAcquisition:
        await self.cancel_camera()
        if self.random_dog_client is None:
            return ImageAcquisition(
                source=ImageSource.UNSPLASH, error=RANDOM_IMAGE_FAILED_MESSAGE
            )

        try:
            response = await self.random_dog_client.get_random_dog()
            image = EncodedImage.from_data_uri(response.image)
        except PawRecognitionError as e:
            logger.warning("Random dog fetch failed", error=e.message)
            return ImageAcquisition(
                source=ImageSource.UNSPLASH, error=RANDOM_IMAGE_FAILED_MESSAGE
            )

        return ImageAcquisition(
            source=ImageSource.UNSPLASH,
            image=image,
            attribution=response.attribution,
        )

    async def aclose(self) -> None:
        await self.cancel_camera()

    async def __aenter__(self) -> "ImageSourceAdapter":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()
