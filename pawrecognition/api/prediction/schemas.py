"""Prediction API schemas."""

from pydantic import BaseModel, Field


class PredictImageRequest(BaseModel):
    # A missing or empty image is answered with "No image provided"
    image: str | None = None


class Prediction(BaseModel):
    label: str  # breed name, hyphen-delimited
    confidence: float = Field(ge=0.0, le=1.0)

    @property
    def display_label(self) -> str:
        return self.label.replace("-", " ")

    @property
    def confidence_percent(self) -> str:
        return f"{self.confidence * 100:.1f}%"


class PredictionResponse(BaseModel):
    """Success body of the inference service, ranked best first."""

    predictions: list[Prediction]
