"""Failure taxonomy for image acquisition and prediction.

Every error carries a short, user-facing ``message``. Components convert these
into value results at their boundary, so callers in a presentation layer only
ever see the message, never the exception.
"""


class PawRecognitionError(Exception):
    """Base class for all acquisition and prediction failures."""

    default_message = "An unexpected error occurred"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ImageValidationError(PawRecognitionError):
    """The image is not an image, is too large, or is not a valid data URI."""

    default_message = "Please select a valid image file"


class ImageReadError(PawRecognitionError):
    """Reading local image data failed."""

    default_message = "Failed to read image"


class CameraError(ImageReadError):
    default_message = "Failed to access camera. Please check permissions."


class NetworkError(PawRecognitionError):
    """A remote endpoint could not be reached or answered with a failure."""

    default_message = "Network request failed"


class AuthError(PawRecognitionError):
    default_message = "Authentication failed. Please check your API key."


class RateLimitError(PawRecognitionError):
    default_message = "Too many requests. Please try again later."


class ApiError(PawRecognitionError):
    """Any other unsuccessful response from the inference service or relay."""

    default_message = "Unknown error"

    def __init__(self, message: str | None = None, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)
