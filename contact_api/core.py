"""Application configuration, logging setup and CORS policy.

This module defines the application settings loaded from environment
variables, a cached accessor for them, and the static cross-origin
policy applied to every route.
"""

import logging
from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings


CORS_ALLOWED_HEADERS = [
    "Origin",
    "Content-Type",
    "Accept",
    "Authorization",
    "X-Requested-With",
    "Access-Control-Allow-Origin",
    "Access-Control-Request-Method",
    "Access-Control-Request-Headers",
]
CORS_EXPOSED_HEADERS = CORS_ALLOWED_HEADERS
CORS_ALLOWED_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# largest value a 64-bit signed INTEGER column can hold
MAX_DB_INTEGER = 2**63 - 1


class Settings(BaseSettings):
    """Application configuration loaded from environment variables.

    Attributes:
        DATABASE_URL: Database connection string.
        CORS_ORIGIN: The single origin allowed to make cross-origin requests.
        MEDIA_ROOT: Directory the photo upload directory is resolved against.
        UPLOAD_DIR: Photo directory, relative to ``MEDIA_ROOT``.
        PHOTO_BASE_URL: Prefix joined with the stored photo path to build
            ``photo_url``.
        MAX_PHOTO_SIZE: Largest accepted photo upload in bytes.
        ALLOWED_PHOTO_EXTENSIONS: Lower-case extensions accepted for photos.
        DEFAULT_PAGE_SIZE: Page size used when the caller gives none.
        LOG_LEVEL: Root logging level.
    """

    DATABASE_URL: str = "sqlite:///./contacts.db"
    CORS_ORIGIN: str = "http://localhost:5173"
    MEDIA_ROOT: str = "."
    UPLOAD_DIR: str = "uploads/photos"
    PHOTO_BASE_URL: str = "http://localhost:8000/contacts/"
    MAX_PHOTO_SIZE: int = 2 * 1024 * 1024
    ALLOWED_PHOTO_EXTENSIONS: List[str] = [".jpg", ".jpeg", ".png"]
    DEFAULT_PAGE_SIZE: int = 10
    LOG_LEVEL: str = "INFO"

    class Config:
        """Pydantic configuration for loading environment variables."""

        env_file = ".env"
        extra = "allow"


@lru_cache()
def get_settings() -> Settings:
    """Return cached application settings.

    The settings object is cached to prevent reloading environment
    variables multiple times during application lifetime.
    """

    return Settings()


def configure_logging(level: str = "INFO") -> None:
    """Configure the root logger once for the whole process."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
