"""Inference service settings configuration."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class InferenceSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # The relay answers 500 until both are set
    INFERENCE_API_URL: str | None = None
    INFERENCE_API_KEY: str | None = None
    INFERENCE_TIMEOUT: int = 30

    @property
    def is_configured(self) -> bool:
        return bool(self.INFERENCE_API_URL and self.INFERENCE_API_KEY)


def get_inference_settings() -> InferenceSettings:
    return InferenceSettings()
