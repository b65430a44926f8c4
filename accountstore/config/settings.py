"""
Configuration settings for AccountStore.

This module provides the ambient client configuration: where the account
store database lives and how the client logs. Values are read from the
environment so that the surrounding client can relocate the store without
code changes.

The configuration supports multiple environments (development, production,
testing) selected through the ACCOUNT_STORE_ENV variable.
"""

import logging
import os
from typing import Dict, Any, List


class Settings:
    """Client configuration settings"""

    # Framework version
    FRAMEWORK_NAME = "accountstore"

    # Store settings
    STORE_PATH = os.getenv("ACCOUNT_STORE_PATH", "store.sqlite3")

    # Logging settings
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    @classmethod
    def get_store_config(cls) -> Dict[str, Any]:
        """Get store configuration"""
        return {
            "path": cls.STORE_PATH,
        }

    @classmethod
    def get_logging_config(cls) -> Dict[str, Any]:
        """Get logging configuration"""
        return {
            "level": cls.LOG_LEVEL,
            "format": cls.LOG_FORMAT,
        }

    @classmethod
    def validate_config(cls) -> List[str]:
        """Validate configuration and return list of errors"""
        errors = []

        if not cls.STORE_PATH:
            errors.append("STORE_PATH must not be empty")

        if not isinstance(logging.getLevelName(str(cls.LOG_LEVEL).upper()), int):
            errors.append("LOG_LEVEL must be one of: DEBUG, INFO, WARNING, ERROR, CRITICAL")

        return errors


# Environment-specific settings
class DevelopmentSettings(Settings):
    """Development environment settings"""
    LOG_LEVEL = "DEBUG"


class ProductionSettings(Settings):
    """Production environment settings"""
    LOG_LEVEL = "WARNING"


class TestingSettings(Settings):
    """Testing environment settings"""
    LOG_LEVEL = "DEBUG"
    STORE_PATH = ":memory:"


# Get settings based on environment
def get_settings() -> Settings:
    """Get settings based on environment variable"""
    env = os.getenv("ACCOUNT_STORE_ENV", "development").lower()

    if env == "production":
        return ProductionSettings()
    elif env == "testing":
        return TestingSettings()
    else:
        return DevelopmentSettings()


def configure_logging(config: Settings | None = None) -> None:
    """Configure root logging from settings."""
    config = config or settings
    logging_config = config.get_logging_config()
    logging.basicConfig(
        level=str(logging_config["level"]).upper(),
        format=logging_config["format"],
    )


# Global settings instance
settings = get_settings()
