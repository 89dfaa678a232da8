"""
Application settings using Pydantic BaseSettings.

Minimal configuration management with environment variable support.
"""

from pydantic import Field
from pydantic_settings import BaseSettings

DEFAULT_SOURCE_URL = "https://srijandubey.github.io/campus-api-mock/SRM-C1-25.json"


class Settings(BaseSettings):
    """Application configuration settings."""

    # Logging configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(
        default="console", description="Log format: json or console"
    )

    # Record source configuration
    source_url: str = Field(
        default=DEFAULT_SOURCE_URL, description="URL of the doctor directory JSON"
    )
    http_timeout: float = Field(
        default=30.0, description="HTTP request timeout in seconds"
    )

    # Display configuration
    default_limit: int = Field(
        default=20, ge=1, description="Number of result rows shown by the CLI"
    )

    model_config = {
        "env_prefix": "DOCLISTING_",
        "env_file": ".env",
        "case_sensitive": False,
    }


def get_settings() -> Settings:
    """Get application settings instance."""
    return Settings()
