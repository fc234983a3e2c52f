"""Application configuration with validation."""
from functools import lru_cache
from typing import Literal

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Runtime settings for the portal API and scripts.

    Scoring weights and normalization references are fixed constants in
    nirf_portal.scoring.constants and are not read from the environment.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "NIRF Submission Portal"
    APP_VERSION: str = "1.0.0"
    APP_ENV: Literal["development", "staging", "production"] = "development"
    DEBUG: bool = False
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    LOG_FORMAT: Literal["json", "console"] = "json"

    # API
    API_V1_PREFIX: str = "/api/v1"
    CORS_ALLOW_ORIGINS: list[str] = ["*"]

    # Scoring
    LOG_SCORE_BREAKDOWNS: bool = False  # attach full breakdowns to engine log events

    @model_validator(mode="after")
    def validate_production_settings(self):
        """Ensure production does not run with debug output."""
        if self.APP_ENV == "production":
            if self.DEBUG:
                raise ValueError("DEBUG must be False in production")
            if self.LOG_FORMAT != "json":
                raise ValueError("LOG_FORMAT must be 'json' in production")
        return self


@lru_cache
def get_settings() -> Settings:
    return Settings()
