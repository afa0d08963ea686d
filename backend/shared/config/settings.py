"""
Application settings loaded from environment variables.
Uses pydantic-settings for type-safe configuration.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with defaults for development."""

    # Database
    # SQLite keeps local development zero-setup; production should point at PostgreSQL
    database_url: str = "sqlite:///./kitchen_os.db"
    database_echo: bool = False

    # CORS: comma-separated list of allowed origins (empty uses default localhost list)
    allowed_origins: str = ""

    # Server
    api_port: int = 8000

    # Environment
    environment: str = "development"
    debug: bool = True
    log_level: str = ""  # Empty derives the level from debug

    # Rate limiting for report generation (slowapi limit string)
    rate_limit_enabled: bool = True
    export_rate_limit: str = "10/minute"

    # Reports
    product_name: str = "Kitchen OS"
    # TTF fonts with Turkish glyphs; Helvetica is used when the files are missing
    pdf_font_path: str = "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf"
    pdf_font_bold_path: str = "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False

    def validate_production_settings(self) -> list[str]:
        """
        Validate that the configuration is safe for production.
        Returns a list of validation errors. Empty list means all checks pass.
        """
        errors = []

        if self.environment == "production":
            if self.database_url.startswith("sqlite"):
                errors.append("DATABASE_URL must point to a server database in production")

            if self.debug:
                errors.append("DEBUG must be False in production")

            if not self.allowed_origins:
                errors.append(
                    "ALLOWED_ORIGINS must be set in production (comma-separated list of allowed domains)"
                )

        return errors


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Convenience exports
settings = get_settings()

# Direct access to commonly used settings
DATABASE_URL = settings.database_url
