"""
FinalTake — Application Configuration
Uses pydantic-settings for type-safe environment variable management.
"""

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # App
    APP_NAME: str = "FinalTake"
    ENVIRONMENT: str = "development"  # "development" or "production"
    DEBUG: bool = False
    ALLOWED_ORIGINS: str = "http://localhost:3000"

    # Database (any async SQLAlchemy URL; Postgres via asyncpg in production)
    DATABASE_URL: str = "sqlite+aiosqlite:///./finaltake.db"

    # TMDB (v4 read access token)
    TMDB_API_KEY: str = ""
    TMDB_BASE_URL: str = "https://api.themoviedb.org/3"
    TMDB_IMAGE_BASE: str = "https://image.tmdb.org/t/p"

    # Enrichment APIs
    OMDB_API_KEY: str = ""
    YOUTUBE_API_KEY: str = ""

    # Discover
    DISCOVER_ENRICH_LIMIT: int = 20
    SIMILAR_LIMIT: int = 5

    # Rate Limiting
    PROFILE_WRITES_PER_IP_PER_HOUR: int = 120

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


@lru_cache()
def get_settings() -> Settings:
    """Cached settings singleton."""
    return Settings()
