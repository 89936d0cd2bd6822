"""
Dice Pool - Application Settings

Loads configuration from environment variables (or a .env file) using
Pydantic Settings.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    debug: bool = False
    log_level: str = "INFO"

    # Pool limits, enforced at the input boundary
    max_dice_per_type: int = Field(default=100, ge=1)

    # Seed for the engine's random source (None = nondeterministic)
    random_seed: int | None = None

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached singleton settings instance."""
    return Settings()
