from .camera import CameraCapture, CaptureDevice
from .encoding import encode, fetch_and_encode
from .models import ImageAcquisition, ImageSource, PredictionResult
from .prediction import PredictionClient, SubmissionMode
from .random_dog import RandomDogClient
from .sources import ImageSourceAdapter

__all__ = [
    "CameraCapture",
    "CaptureDevice",
    "encode",
    "fetch_and_encode",
    "ImageAcquisition",
    "ImageSource",
    "PredictionResult",
    "PredictionClient",
    "SubmissionMode",
    "RandomDogClient",
    "ImageSourceAdapter",
]
