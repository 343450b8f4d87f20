"""
Bitbucket Provider Settings - Configuration management using Pydantic Settings.

Loads configuration from environment variables and .env files.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Find project root (where .env file is located)
PROJECT_ROOT = Path(__file__).parent.parent


class BitbucketSettings(BaseSettings):
    """
    Bitbucket provider configuration settings.

    Settings are loaded from:
    1. Environment variables (highest priority)
    2. .env file in current directory
    3. Default values (lowest priority)
    """

    model_config = SettingsConfigDict(
        env_file=str(PROJECT_ROOT / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_prefix="BITBUCKET_",  # All provider env vars must start with BITBUCKET_
    )

    # API Configuration
    base_url: str = Field(
        default="https://api.bitbucket.org/",
        description="Base URL of the Bitbucket REST API (env: BITBUCKET_BASE_URL)",
    )

    username: str | None = Field(
        default=None, description="Bitbucket username (env: BITBUCKET_USERNAME)"
    )

    password: str | None = Field(
        default=None,
        description="Bitbucket app password (env: BITBUCKET_PASSWORD)",
    )

    timeout: float = Field(
        default=30.0,
        description="HTTP timeout in seconds (env: BITBUCKET_TIMEOUT)",
    )

    # Logging Configuration
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR) (env: BITBUCKET_LOG_LEVEL)",
    )


# Global settings instance
_settings: BitbucketSettings | None = None


def get_settings() -> BitbucketSettings:
    """
    Get the global settings instance.

    Creates the settings instance on first call, then returns cached instance.

    Returns:
        BitbucketSettings instance
    """
    global _settings
    if _settings is None:
        _settings = BitbucketSettings()
    return _settings


def reload_settings() -> BitbucketSettings:
    """
    Reload settings from environment/files.

    Useful for testing or when .env file changes.

    Returns:
        Fresh BitbucketSettings instance
    """
    global _settings
    _settings = BitbucketSettings()
    return _settings
