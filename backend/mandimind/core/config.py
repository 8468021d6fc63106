"""
Application configuration using pydantic-settings.

WHAT: Centralized config from environment variables
WHY: Type-safe, validated config with sensible defaults
HOW: Pydantic BaseSettings reads from .env and environment
"""

from pydantic_settings import BaseSettings
from pydantic import field_validator
from typing import Literal, Optional
from pathlib import Path


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # App metadata
    APP_NAME: str = "MandiMind Negotiation Engine"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False

    # Session defaults
    DEFAULT_LANGUAGE: Literal["en", "hi", "te", "ta", "bn"] = "en"
    DEFAULT_QUANTITY: int = 50

    # Negotiation pricing
    MARKET_JITTER: float = 0.10  # +/- fraction applied to commodity base price
    REASONABLE_BAND_LOW: float = 0.5
    REASONABLE_BAND_HIGH: float = 1.5
    MAX_OFFER_PRICE: int = 10000  # sanity ceiling for typed offers
    NEGOTIATION_SEED: Optional[int] = None

    # Cosmetic "typing" delay before the counterpart replies
    TYPING_DELAY_MIN_SECONDS: float = 0.8
    TYPING_DELAY_MAX_SECONDS: float = 1.4

    # CORS - accepts comma-separated string or list
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5173"

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS_ORIGINS from comma-separated string or list."""
        if isinstance(v, list):
            return ",".join(v)
        return v

    @field_validator("TYPING_DELAY_MAX_SECONDS")
    @classmethod
    def validate_delay_range(cls, v: float, info) -> float:
        """Ensure max delay >= min delay."""
        low = info.data.get("TYPING_DELAY_MIN_SECONDS")
        if low is not None and v < low:
            raise ValueError("TYPING_DELAY_MAX_SECONDS must be >= TYPING_DELAY_MIN_SECONDS")
        return v

    def get_cors_origins_list(self) -> list[str]:
        """Get CORS origins as a list."""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = "./data/logs/app.log"

    # Session Management
    SESSION_CLEANUP_HOURS: int = 1  # interval of the eviction timer
    SESSION_TTL_MINUTES: int = 60  # idle sessions older than this are evicted

    class Config:
        # Look for .env in project root first, then backend/.env
        env_file = [
            str(Path(__file__).parent.parent.parent.parent / ".env"),
            str(Path(__file__).parent.parent.parent / ".env"),
        ]
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"


# Singleton instance
settings = Settings()
