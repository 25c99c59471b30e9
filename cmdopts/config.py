"""
Builder configuration and error types.

This module provides the configuration model for the option builder,
loaded from environment variables (optionally via a .env file), and the
exception hierarchy raised while applying and building command options.
"""

import codecs
import logging
import os
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)

_TRUTHY = ("true", "1", "yes", "on")


class OptionsError(Exception):
    """Base exception for all option builder errors."""
    pass


class OptionValidationError(OptionsError):
    """
    Raised when an option is given an invalid value.

    A single failure carries the offending ``field``. When ``build`` reports
    every failure recorded while applying options, they are listed in
    ``errors``.
    """

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        errors: Optional[List["OptionValidationError"]] = None,
    ):
        super().__init__(message)
        self.field = field
        self.errors = list(errors) if errors else []


class OptionConflictError(OptionsError):
    """Raised when mutually exclusive options are both set."""
    pass


class ExistenceConflictError(OptionConflictError):
    """Both the exist and not-exist preconditions were requested."""
    pass


class ExpiryConflictError(OptionConflictError):
    """Both a seconds and a milliseconds expiry were requested."""
    pass


class PayloadEncodingError(OptionsError):
    """
    Raised when the payload cannot be encoded.

    ``partial`` holds the arguments assembled before encoding failed. It is
    never a usable command.
    """

    def __init__(self, message: str, partial: Optional[List[Any]] = None):
        super().__init__(message)
        self.partial = list(partial) if partial else []


class OptionsConfigurationError(OptionsError):
    """Raised when the builder configuration is invalid."""
    pass


class OptionsConfig(BaseModel):
    """Configuration model for the option builder with validation."""

    model_config = ConfigDict(frozen=True)

    fail_fast: bool = Field(
        default=False,
        description="Raise validation errors when an option is applied instead of at build time",
    )
    json_sort_keys: bool = Field(default=False, description="Sort object keys in encoded payloads")
    json_ensure_ascii: bool = Field(default=False, description="Escape non-ASCII characters in payloads")
    payload_encoding: str = Field(default="utf-8", description="Text encoding for payload bytes")
    log_level: str = Field(default="WARNING", description="Logging level for the cmdopts logger")

    @field_validator("payload_encoding")
    @classmethod
    def validate_payload_encoding(cls, v: str) -> str:
        """Ensure the payload encoding names a known codec."""
        try:
            return codecs.lookup(v).name
        except LookupError:
            raise ValueError(f"Unknown payload encoding: {v}")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is one of the standard levels."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()


def load_config(env_file: Optional[str] = None) -> OptionsConfig:
    """
    Load configuration from environment variables and .env file.

    Args:
        env_file: Optional path to .env file. If None, looks for .env in current directory.

    Returns:
        OptionsConfig: Validated configuration object

    Raises:
        OptionsConfigurationError: If a setting is invalid
    """
    if env_file is None:
        env_file = ".env"

    if os.path.exists(env_file):
        load_dotenv(env_file)

    config_data: Dict[str, Any] = {
        "fail_fast": os.getenv("CMDOPTS_FAIL_FAST", "false").lower() in _TRUTHY,
        "json_sort_keys": os.getenv("CMDOPTS_JSON_SORT_KEYS", "false").lower() in _TRUTHY,
        "json_ensure_ascii": os.getenv("CMDOPTS_JSON_ENSURE_ASCII", "false").lower() in _TRUTHY,
        "payload_encoding": os.getenv("CMDOPTS_PAYLOAD_ENCODING", "utf-8"),
        "log_level": os.getenv("CMDOPTS_LOG_LEVEL", "WARNING"),
    }

    try:
        return OptionsConfig(**config_data)
    except ValidationError as e:
        raise OptionsConfigurationError(f"Configuration validation failed: {e}") from e


def configure_logging(config: Optional[OptionsConfig] = None) -> None:
    """Apply the configured log level to the package logger."""
    config = config or get_config()
    logging.getLogger("cmdopts").setLevel(config.log_level)


# Global configuration instance
_config: Optional[OptionsConfig] = None


def get_config() -> OptionsConfig:
    """
    Get the global configuration instance, loading it if necessary.

    Returns:
        OptionsConfig: The global configuration object
    """
    global _config
    if _config is None:
        _config = load_config()
        logger.debug(f"Loaded option builder config: {_config}")
    return _config


def reset_config() -> None:
    """Drop the cached global configuration so the next access reloads it."""
    global _config
    _config = None
