"""
Configuration management for the Atom feed library.

Settings are read from environment variables and an optional .env file,
falling back to defaults suitable for local use.

Responsibility: Centralized configuration and environment management
"""

from enum import Enum
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from . import __version__


class Environment(str, Enum):
    """Deployment environment"""
    LOCAL = "local"
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class FeedConfig(BaseSettings):
    """Feed serialization configuration"""

    # Generator element
    generator_name: str = Field(default="atomfeed")
    generator_uri: Optional[str] = Field(default=None)
    generator_version: Optional[str] = Field(default=__version__)

    # Output settings
    pretty_print: bool = Field(default=True)
    encoding: str = Field(default="UTF-8")
    xml_declaration: bool = Field(default=True)

    model_config = SettingsConfigDict(
        env_prefix="FEED_",
        case_sensitive=False,
        extra="ignore"
    )


class AppConfig(BaseSettings):
    """Application configuration"""

    # Environment
    environment: Environment = Field(default=Environment.LOCAL)
    debug: bool = Field(default=False)

    # Application metadata
    app_name: str = Field(default="atomfeed")
    app_version: str = Field(default=__version__)

    # Logging
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        """Accept log levels in any case"""
        if isinstance(v, str):
            return v.strip().upper()
        return v


class Settings(BaseSettings):
    """
    Global settings container.

    Loads configuration from:
    1. Environment variables
    2. .env file
    3. Default values

    Example:
        settings = Settings(feed=FeedConfig(pretty_print=False))
    """

    app: AppConfig = Field(default_factory=AppConfig)
    feed: FeedConfig = Field(default_factory=FeedConfig)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Global settings instance
settings = Settings()
