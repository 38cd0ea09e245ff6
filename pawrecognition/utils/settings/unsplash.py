"""Unsplash settings configuration."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class UnsplashSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    UNSPLASH_ACCESS_KEY: str | None = None
    UNSPLASH_API_URL: str = "https://api.unsplash.com"
    UNSPLASH_QUERY: str = "dog"
    UNSPLASH_TIMEOUT: int = 30


def get_unsplash_settings() -> UnsplashSettings:
    return UnsplashSettings()
