API_VERSION_HEADER = "X-Paw-Recognition-Version"
REQUEST_ID_HEADER = "X-Request-ID"

SERVICE_NAME = "paw-recognition"

# Unsplash
UNSPLASH_RANDOM_PHOTO_PATH = "/photos/random"
UNSPLASH_ACCEPT_VERSION = "v1"
UNSPLASH_URL_PREFERENCE = ("regular", "full")

# Paths excluded from request logging
SKIP_LOGGING_PATHS = {"/health/liveness"}
