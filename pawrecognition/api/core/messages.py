"""Centralized message codes and default messages for relay responses."""

from enum import Enum

from pydantic import BaseModel


class MessageCode(str, Enum):
    """Centralized message codes for relay responses."""

    # Informational
    SERVICE_RUNNING = "SERVICE_RUNNING"

    # Configuration
    SERVER_CONFIGURATION_ERROR = "SERVER_CONFIGURATION_ERROR"

    # Validation errors
    NO_IMAGE_PROVIDED = "NO_IMAGE_PROVIDED"
    INVALID_REQUEST_BODY = "INVALID_REQUEST_BODY"
    REQUEST_TOO_LARGE = "REQUEST_TOO_LARGE"

    # Prediction relay
    PREDICTION_SERVICE_UNAVAILABLE = "PREDICTION_SERVICE_UNAVAILABLE"
    PREDICTION_API_ERROR = "PREDICTION_API_ERROR"
    INVALID_UPSTREAM_RESPONSE = "INVALID_UPSTREAM_RESPONSE"

    # Random image relay
    UNSPLASH_FETCH_FAILED = "UNSPLASH_FETCH_FAILED"
    UNSPLASH_NO_IMAGE_URL = "UNSPLASH_NO_IMAGE_URL"
    IMAGE_DOWNLOAD_FAILED = "IMAGE_DOWNLOAD_FAILED"

    # Generic errors
    INTERNAL_ERROR = "INTERNAL_ERROR"


DEFAULT_MESSAGES = {
    MessageCode.SERVICE_RUNNING: "Paw Recognition relay is running",
    MessageCode.SERVER_CONFIGURATION_ERROR: "Server configuration error",
    MessageCode.NO_IMAGE_PROVIDED: "No image provided",
    MessageCode.INVALID_REQUEST_BODY: "Invalid request body",
    MessageCode.REQUEST_TOO_LARGE: "Request entity too large",
    MessageCode.PREDICTION_SERVICE_UNAVAILABLE: "Prediction service unavailable",
    MessageCode.PREDICTION_API_ERROR: "Unknown error",
    MessageCode.INVALID_UPSTREAM_RESPONSE: "Invalid response from prediction service",
    MessageCode.UNSPLASH_FETCH_FAILED: "Failed to fetch image from Unsplash",
    MessageCode.UNSPLASH_NO_IMAGE_URL: "No image URL in response",
    MessageCode.IMAGE_DOWNLOAD_FAILED: "Failed to download image",
    MessageCode.INTERNAL_ERROR: "Internal server error",
}


def get_default_message(code: MessageCode) -> str:
    """Get default message for a message code."""
    return DEFAULT_MESSAGES.get(code, "Unknown error")


class ErrorResponse(BaseModel):
    """Error body shared by every relay route and the inference service."""

    error: str


class MessageResponse(BaseModel):
    message: str
