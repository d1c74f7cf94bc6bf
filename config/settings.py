"""
Settings configuration for deckforge.
"""
from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings."""

    # App settings
    APP_ENV: str = Field("development")
    LOG_LEVEL: str = Field("INFO")

    # Logging
    LOGFIRE_TOKEN: Optional[str] = Field(None)

    # Styling
    DEFAULT_BRAND_GUIDELINES: str = Field(
        "corporate",
        description="Brand theme used when a request names none or an unknown one"
    )

    # Asset curation
    # Each source call gets its own deadline; a timeout counts as an empty result
    ASSET_SOURCE_TIMEOUT: float = Field(8.0, gt=0)
    ASSET_RESULTS_PER_SOURCE: int = Field(5, ge=1, le=30)

    # Unsplash (photos)
    UNSPLASH_ENABLED: bool = Field(True)
    UNSPLASH_ACCESS_KEY: Optional[str] = Field(None)
    UNSPLASH_API_URL: str = Field("https://api.unsplash.com")

    # Iconify (icons, no key required)
    ICONIFY_ENABLED: bool = Field(True)
    ICONIFY_API_URL: str = Field("https://api.iconify.design")

    # Freepik (illustrations, mixed licensing)
    FREEPIK_ENABLED: bool = Field(False)
    FREEPIK_API_KEY: Optional[str] = Field(None)
    FREEPIK_API_URL: str = Field("https://api.freepik.com")

    # Presentation review thresholds
    MAX_RECOMMENDED_SLIDES: int = Field(
        10,
        ge=1,
        description="Decks above this size get a condensing suggestion"
    )
    MAX_CONTENT_POINTS: int = Field(
        7,
        ge=1,
        description="Maximum bullet points rendered per slide"
    )

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"  # Ignore extra fields in .env

    @property
    def has_unsplash(self) -> bool:
        """Check if Unsplash can be queried."""
        return bool(self.UNSPLASH_ENABLED and self.UNSPLASH_ACCESS_KEY)

    @property
    def has_freepik(self) -> bool:
        """Check if Freepik can be queried."""
        return bool(self.FREEPIK_ENABLED and self.FREEPIK_API_KEY)


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
