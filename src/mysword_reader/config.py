"""Configuration management for MySword Reader."""

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings, loaded from environment and .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="MYSWORD_",
    )

    # Paths
    data_dir: Path = Field(default=Path("data"))

    # Logging
    log_level: str = Field(default="WARNING", description="Standard logging level name")

    # Reading
    no_annotation_message: str = Field(
        default="No annotation available for this verse.",
        description="Shown when the selected commentary has nothing for a verse",
    )
    book_match_threshold: float = Field(
        default=85.0, description="Minimum fuzzy score (0-100) for book name matching"
    )

    @property
    def modules_dir(self) -> Path:
        return self.data_dir / "modules"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def setup_logging(level: str | None = None) -> None:
    """Configure root logging from settings."""
    name = (level or get_settings().log_level).upper()
    logging.basicConfig(
        level=getattr(logging, name, logging.WARNING),
        format="%(levelname)s: %(name)s: %(message)s",
    )
