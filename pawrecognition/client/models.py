"""Value results returned by the client library."""

from enum import Enum

from pydantic import BaseModel, model_validator

from pawrecognition.api.prediction.schemas import Prediction
from pawrecognition.api.random_dog.schemas import Attribution
from pawrecognition.core.images import EncodedImage


class ImageSource(str, Enum):
    UPLOAD = "upload"
    CAMERA = "camera"
    UNSPLASH = "unsplash"


class PredictionResult(BaseModel):
    """Ranked predictions or an error message, never both."""

    predictions: list[Prediction] | None = None
    error: str | None = None

    @model_validator(mode="after")
    def check_exclusive(self) -> "PredictionResult":
        if (self.error is None) == (self.predictions is None):
            raise ValueError("Exactly one of predictions or error must be set")
        if self.predictions is not None and not self.predictions:
            raise ValueError("predictions must not be empty")
        return self

    @classmethod
    def success(cls, predictions: list[Prediction]) -> "PredictionResult":
        return cls(predictions=predictions)

    @classmethod
    def failure(cls, message: str) -> "PredictionResult":
        return cls(error=message)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def top_prediction(self) -> Prediction | None:
        return self.predictions[0] if self.predictions else None


class ImageAcquisition(BaseModel):
    """Outcome of one acquisition: an encoded image or an error message."""

    source: ImageSource
    image: EncodedImage | None = None
    attribution: Attribution | None = None
    error: str | None = None

    @model_validator(mode="after")
    def check_exclusive(self) -> "ImageAcquisition":
        if (self.error is None) == (self.image is None):
            raise ValueError("Exactly one of image or error must be set")
        if self.attribution is not None and self.source != ImageSource.UNSPLASH:
            raise ValueError("Only Unsplash images carry attribution")
        return self

    @property
    def ok(self) -> bool:
        return self.error is None
