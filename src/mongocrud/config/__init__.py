"""
Configuration Package for the MongoDB data-access layer

Configuration comes from environment variables, optionally set in a .env file.
"""

import logging
from typing import Optional

from dotenv import load_dotenv
from .env_validator import ConfigValidator, ConfigurationError, get_env, require_env

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class Config:
    """
    Application configuration with environment variable support.

    Values are read once, when the package is imported.
    """

    # MongoDB Configuration
    try:
        MONGODB_URI = ConfigValidator.get_required_env(
            "MONGODB_URI",
            "MongoDB connection URI",
            "mongodb://localhost:27017"
        )
    except ConfigurationError:
        logger.warning("MONGODB_URI not set, using default: mongodb://localhost:27017")
        MONGODB_URI = "mongodb://localhost:27017"

    try:
        DATABASE_NAME = ConfigValidator.get_required_env(
            "DATABASE_NAME",
            "MongoDB database name",
            "mongocrud"
        )
    except ConfigurationError:
        logger.warning("DATABASE_NAME not set, using default: mongocrud")
        DATABASE_NAME = "mongocrud"

    # Client options
    MONGODB_SERVER_SELECTION_TIMEOUT_MS = get_env(
        "MONGODB_SERVER_SELECTION_TIMEOUT_MS",
        5000,
        "How long the client waits for a reachable server, in milliseconds",
        int
    )
    MONGODB_APP_NAME = get_env("MONGODB_APP_NAME", "mongocrud", "Application name reported to the server")
    MONGODB_TZ_AWARE = get_env("MONGODB_TZ_AWARE", True, "Decode datetimes as timezone-aware UTC", bool)

    # Logging
    LOG_LEVEL = get_env("LOG_LEVEL", "INFO", "Logging level")
    LOG_FORMAT = get_env("LOG_FORMAT", DEFAULT_LOG_FORMAT, "Logging format string")

    @classmethod
    def validate_required_config(cls):
        """
        Fail when the connection variables are not set explicitly.

        The class attributes fall back to local defaults; call this from
        entry points that must not silently talk to a local server.
        """
        ConfigValidator.validate_required_vars({
            "MONGODB_URI": "MongoDB connection URI",
            "DATABASE_NAME": "MongoDB database name",
        })
        logger.info("MongoDB configuration validated")

    @classmethod
    def log_configuration(cls):
        """Log current configuration (masking sensitive values)"""
        config_dict = {
            "MONGODB_URI": cls.MONGODB_URI,
            "DATABASE_NAME": cls.DATABASE_NAME,
            "MONGODB_SERVER_SELECTION_TIMEOUT_MS": cls.MONGODB_SERVER_SELECTION_TIMEOUT_MS,
            "MONGODB_APP_NAME": cls.MONGODB_APP_NAME,
            "MONGODB_TZ_AWARE": cls.MONGODB_TZ_AWARE,
            "LOG_LEVEL": cls.LOG_LEVEL,
        }

        ConfigValidator.log_configuration(
            config_dict,
            mask_keys=['key', 'password', 'secret', 'token', 'uri']
        )


def configure_logging(level: Optional[str] = None, fmt: Optional[str] = None) -> None:
    """Set up root logging for scripts and applications using this package"""
    logging.basicConfig(
        level=getattr(logging, (level or Config.LOG_LEVEL).upper(), logging.INFO),
        format=fmt or Config.LOG_FORMAT
    )


__all__ = [
    "Config",
    "ConfigValidator",
    "ConfigurationError",
    "configure_logging",
    "get_env",
    "require_env",
]
