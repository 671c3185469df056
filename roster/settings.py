"""Application settings and configuration (Pydantic v2)."""
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    # Simulated latency of the local "API calls"
    catalog_delay_ms: int = Field(
        default=800, ge=0, description="Delay before the course catalog resolves"
    )
    upload_delay_ms: int = Field(
        default=1000, ge=0, description="Delay before an image upload resolves"
    )

    # Profile pictures
    max_image_bytes: int = Field(
        default=5 * 1024 * 1024, gt=0, description="Largest accepted profile picture"
    )

    # Seed the roster with the reference students on startup
    seed_mock_data: bool = Field(default=True)

    # Logging
    log_level: str = Field(default="INFO", description="Root log level")

    # Pydantic v2 settings
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_prefix="",                 # no prefix
    )

    @property
    def catalog_delay(self) -> float:
        return self.catalog_delay_ms / 1000

    @property
    def upload_delay(self) -> float:
        return self.upload_delay_ms / 1000


# Global settings instance
settings = Settings()
