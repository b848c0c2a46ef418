"""
Environment Configuration Validator

Helpers for reading environment variables with typed defaults and for
logging a readable message when a required variable is missing.
"""

import os
import logging
from typing import Dict, List, Optional, Any

logger = logging.getLogger(__name__)

_TRUE_VALUES = ('true', '1', 'yes', 'on')


class ConfigurationError(Exception):
    """Raised when required configuration is missing"""
    pass


class ConfigValidator:
    """Reads and validates environment configuration"""

    @staticmethod
    def get_required_env(
        key: str,
        description: str,
        example: Optional[str] = None
    ) -> str:
        """
        Get a required environment variable

        Args:
            key: Environment variable name
            description: What the variable is for
            example: Example value shown in the error message

        Returns:
            The environment variable value

        Raises:
            ConfigurationError: If the variable is not set
        """
        value = os.getenv(key)

        if not value:
            error_msg = (
                f"\nCONFIGURATION ERROR: Missing required environment variable\n\n"
                f"Variable: {key}\n"
                f"Description: {description}\n"
                f"{'Example: ' + example if example else ''}\n\n"
                f"Please add this variable to your .env file:\n"
                f"    {key}={example or '<your_value>'}\n"
            )
            logger.error(error_msg)
            raise ConfigurationError(f"Missing required environment variable: {key}")

        return value

    @staticmethod
    def get_env_with_default(
        key: str,
        default: Any,
        description: str,
        env_type: type = str
    ) -> Any:
        """
        Get environment variable with default value and type conversion

        Args:
            key: Environment variable name
            default: Value used when the variable is unset or invalid
            description: What the variable is for
            env_type: str, int, float or bool

        Returns:
            The converted value or ``default``
        """
        value = os.getenv(key)

        if not value:
            logger.debug(f"Using default value for {key}: {default} ({description})")
            return default

        try:
            if env_type == bool:
                return value.lower() in _TRUE_VALUES
            elif env_type == int:
                return int(value)
            elif env_type == float:
                return float(value)
            else:
                return value
        except (ValueError, AttributeError):
            logger.warning(
                f"Invalid value for {key}: {value}. "
                f"Expected {env_type.__name__}. Using default: {default}"
            )
            return default

    @staticmethod
    def validate_required_vars(required_vars: Dict[str, str]) -> None:
        """
        Validate several required environment variables at once

        Args:
            required_vars: Dict of {var_name: description}

        Raises:
            ConfigurationError: If any required variable is missing
        """
        missing_vars = [
            (var_name, description)
            for var_name, description in required_vars.items()
            if not os.getenv(var_name)
        ]

        if missing_vars:
            error_msg = "\nCONFIGURATION ERROR: Missing required environment variables\n\n"

            for var_name, description in missing_vars:
                error_msg += f"Variable: {var_name}\n"
                error_msg += f"Description: {description}\n\n"

            error_msg += "Please add these variables to your .env file.\n"

            logger.error(error_msg)
            raise ConfigurationError(f"Missing {len(missing_vars)} required environment variable(s)")

    @staticmethod
    def mask_value(value: Any) -> str:
        """Hide the middle of a sensitive value"""
        text = str(value)
        return f"{text[:4]}...{text[-4:]}" if len(text) > 8 else "***"

    @staticmethod
    def log_configuration(config_dict: Dict[str, Any], mask_keys: Optional[List[str]] = None) -> None:
        """
        Log current configuration, masking sensitive values

        Args:
            config_dict: Dictionary of configuration values
            mask_keys: Substrings of keys whose values get masked
        """
        mask_keys = mask_keys or ['key', 'password', 'secret', 'token']

        logger.info("=" * 80)
        logger.info("CURRENT CONFIGURATION")
        logger.info("=" * 80)

        for key, value in sorted(config_dict.items()):
            should_mask = any(mask_word in key.lower() for mask_word in mask_keys)
            display_value = ConfigValidator.mask_value(value) if should_mask and value else value
            logger.info(f"{key}: {display_value}")

        logger.info("=" * 80)


# Convenience functions
def require_env(key: str, description: str, example: Optional[str] = None) -> str:
    """Shorthand for ConfigValidator.get_required_env"""
    return ConfigValidator.get_required_env(key, description, example)


def get_env(key: str, default: Any, description: str = "", env_type: type = str) -> Any:
    """Shorthand for ConfigValidator.get_env_with_default"""
    return ConfigValidator.get_env_with_default(key, default, description, env_type)
