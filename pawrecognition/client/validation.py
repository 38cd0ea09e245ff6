from pawrecognition.core.constants import IMAGE_MEDIA_TYPE_PREFIX, MAX_IMAGE_SIZE_BYTES
from pawrecognition.core.errors import ImageValidationError
from pawrecognition.core.images import EncodedImage

INVALID_IMAGE_TYPE_MESSAGE = "Please select a valid image file"
IMAGE_TOO_LARGE_MESSAGE = "Image size should be less than 5MB"


def validate_media_type(media_type: str | None) -> str:
    if not media_type or not media_type.lower().startswith(IMAGE_MEDIA_TYPE_PREFIX):
        raise ImageValidationError(INVALID_IMAGE_TYPE_MESSAGE)
    return media_type.lower()


def validate_size(size_bytes: int, max_size_bytes: int = MAX_IMAGE_SIZE_BYTES) -> None:
    if size_bytes > max_size_bytes:
        raise ImageValidationError(IMAGE_TOO_LARGE_MESSAGE)


def validate_encoded_image(
    image: EncodedImage | str, max_size_bytes: int = MAX_IMAGE_SIZE_BYTES
) -> EncodedImage:
    """Check an image payload before it is submitted for prediction."""
    if not isinstance(image, EncodedImage):
        image = EncodedImage.from_data_uri(image)

    validate_media_type(image.media_type)
    validate_size(image.size, max_size_bytes)
    return image
