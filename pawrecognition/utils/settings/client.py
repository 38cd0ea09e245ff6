"""Client library settings configuration."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from pawrecognition.core.constants import DEFAULT_TIMEOUT_SECONDS


class ClientSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    RELAY_URL: str = "http://localhost:8000"

    # Direct mode only
    INFERENCE_API_URL: str | None = None
    INFERENCE_API_KEY: str | None = None

    REQUEST_TIMEOUT: int = DEFAULT_TIMEOUT_SECONDS
