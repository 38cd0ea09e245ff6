"""Limits and defaults shared by the client library and the relay."""

MAX_IMAGE_SIZE_BYTES = 5 * 1024 * 1024  # 5MB
IMAGE_MEDIA_TYPE_PREFIX = "image/"
DEFAULT_IMAGE_CONTENT_TYPE = "image/jpeg"
FALLBACK_MEDIA_TYPE = "application/octet-stream"

# Seconds before any outbound call is abandoned
DEFAULT_TIMEOUT_SECONDS = 30

# Browsers encode canvas JPEGs at 0.92 unless told otherwise
CAMERA_JPEG_QUALITY = 92

# Header the inference service reads its credential from
API_KEY_HEADER = "X-API-Key"

PREDICT_PATH = "/predict"
RELAY_PREDICT_PATH = "/api/predict"
RELAY_RANDOM_DOG_PATH = "/api/random-dog"
