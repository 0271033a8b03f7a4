"""Engine configuration using pydantic-settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from pantrylist.schemas import Category


class Settings(BaseSettings):
    """Engine settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="PANTRYLIST_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Parsing
    quantity_precision: int = Field(default=3, ge=0, le=6)
    low_confidence_threshold: float = Field(default=0.6, ge=0.0, le=1.0)

    # Core key matching (rapidfuzz ratio, 0-100)
    fuzzy_synonym_threshold: float = Field(default=92.0, ge=0.0, le=100.0)

    # Classification fallback for names no keyword rule matches
    default_category: Category = Category.PANTRY

    # Application
    environment: str = "development"
    log_level: str = "INFO"
    log_format: str = ""  # "json" forces structured output

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment.lower() == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
