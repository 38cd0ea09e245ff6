"""Camera capture with guaranteed device release."""

import asyncio
import io
from collections.abc import Callable
from typing import Protocol

import numpy as np
from PIL import Image

from pawrecognition.core.constants import CAMERA_JPEG_QUALITY
from pawrecognition.core.errors import CameraError
from pawrecognition.core.images import EncodedImage
from pawrecognition.utils.logger import get_logger

logger = get_logger(__name__)


class CaptureDevice(Protocol):
    """An opened video capture device."""

    def read(self) -> np.ndarray:
        """Return the current frame as an HxW (grayscale), HxWx3 (RGB) or
        HxWx4 (RGBA) uint8 array. BGR frames must be converted first.
        """
        ...

    def release(self) -> None:
        """Stop the device's tracks and free it for other users."""
        ...


DeviceFactory = Callable[[], CaptureDevice]


def _release_opened_device(opening: asyncio.Future) -> None:
    if opening.cancelled() or opening.exception() is not None:
        return
    opening.result().release()
    logger.info("Camera released after an abandoned start")


def frame_to_image(frame: np.ndarray, quality: int = CAMERA_JPEG_QUALITY) -> EncodedImage:
    """Draw a grayscale, RGB or RGBA frame onto an RGB raster of its native
    size and encode it as JPEG.
    """
    array = np.asarray(frame)
    if array.ndim == 3 and array.shape[2] == 1:
        array = array[:, :, 0]
    if array.dtype != np.uint8 or array.ndim not in (2, 3) or array.size == 0:
        raise CameraError("Unsupported camera frame format")
    if array.ndim == 3 and array.shape[2] not in (3, 4):
        raise CameraError("Unsupported camera frame format")

    frame_image = Image.fromarray(array)
    raster = Image.new("RGB", frame_image.size)
    if frame_image.mode == "RGBA":
        raster.paste(frame_image, mask=frame_image.getchannel("A"))
    else:
        raster.paste(frame_image.convert("RGB"))

    buffer = io.BytesIO()
    raster.save(buffer, format="JPEG", quality=quality)
    return EncodedImage.from_bytes(buffer.getvalue(), "image/jpeg")


class CameraCapture:
    """Owns one capture device between ``start`` and capture or cancel.

    The device is released on every exit path: after a capture (successful or
    not), on ``cancel``, and when leaving ``async with``. A device whose open
    is still in flight when the start is cancelled or the camera is stopped
    is released as soon as the open completes.
    """

    def __init__(self, open_device: DeviceFactory, quality: int = CAMERA_JPEG_QUALITY):
        self._open_device = open_device
        self._device: CaptureDevice | None = None
        self._opening: asyncio.Future | None = None
        self.quality = quality

    @property
    def is_active(self) -> bool:
        return self._device is not None

    @property
    def is_starting(self) -> bool:
        return self._opening is not None

    async def start(self) -> None:
        if self._device is not None:
            return

        loop = asyncio.get_running_loop()
        opening = loop.run_in_executor(None, self._open_device)
        self._opening = opening
        try:
            device = await asyncio.shield(opening)
        except asyncio.CancelledError:
            self._abandon_opening()
            raise
        except Exception as e:
            self._opening = None
            logger.error(f"Camera error: {e}")
            raise CameraError() from e

        if self._opening is not opening:
            # stop() ran during the open and has scheduled the release
            raise CameraError("Camera was stopped while starting")
        self._opening = None
        self._device = device
        logger.info("Camera started")

    def _abandon_opening(self) -> None:
        opening, self._opening = self._opening, None
        if opening is not None:
            opening.add_done_callback(_release_opened_device)

    async def capture(self) -> EncodedImage:
        """Grab the current frame, then release the device."""
        device = self._device
        if device is None:
            raise CameraError("Camera is not active")

        loop = asyncio.get_running_loop()
        try:
            frame = await loop.run_in_executor(None, device.read)
            return frame_to_image(frame, self.quality)
        except CameraError:
            raise
        except Exception as e:
            logger.error(f"Frame capture failed: {e}")
            raise CameraError("Failed to capture photo") from e
        finally:
            self.stop()

    def stop(self) -> None:
        self._abandon_opening()
        device, self._device = self._device, None
        if device is None:
            return
        try:
            device.release()
        finally:
            logger.info("Camera stopped")

    async def cancel(self) -> None:
        self.stop()

    async def __aenter__(self) -> "CameraCapture":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.stop()
