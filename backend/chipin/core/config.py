"""
Application configuration and environment settings.
"""
from pydantic_settings import BaseSettings
from pydantic import field_validator
from typing import List, Union


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "ChipInBro"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Localization
    DEFAULT_LANGUAGE: str = "en"
    DEFAULT_CURRENCY: str = "EUR"

    # Share links (the frontend pages that read the token from the URL fragment)
    PUBLIC_BASE_URL: str = "http://localhost:8080"
    SHARE_PAGE: str = "share.html"
    RECEIPT_PAGE: str = "receipt.html"

    # CORS
    CORS_ORIGINS: Union[List[str], str] = ["http://localhost:3000", "http://localhost:8080"]

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS_ORIGINS from comma-separated string or list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @field_validator("PUBLIC_BASE_URL")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Share links are built as f"{PUBLIC_BASE_URL}/{page}"."""
        return v.rstrip("/")

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
