"""
Command option builder for Valkey/Redis-style key-value commands.

This package assembles the positional arguments of commands such as SET,
LREM or ZRANGEBYSCORE from composable option functions. It does not talk
to a server.
"""

from .config import (
    OptionsConfig,
    OptionsError,
    OptionValidationError,
    OptionConflictError,
    ExistenceConflictError,
    ExpiryConflictError,
    PayloadEncodingError,
    OptionsConfigurationError,
    load_config,
    get_config,
    reset_config,
    configure_logging,
)
from .tokens import ExpireUnit, ExistenceCondition, InfinitySentinel
from .payload import encode_payload
from .options import (
    CommandArgument,
    CommandOption,
    Options,
    new_options,
    build,
    with_key,
    with_old_key,
    with_key_value,
    with_data,
    with_count,
    with_expire_second,
    with_expire_millisecond,
    with_exist,
    with_not_exist,
    with_range,
    with_min_inf,
    with_max_inf,
)

__version__ = "0.1.0"

__all__ = [
    # Configuration
    "OptionsConfig",
    "load_config",
    "get_config",
    "reset_config",
    "configure_logging",

    # Errors
    "OptionsError",
    "OptionValidationError",
    "OptionConflictError",
    "ExistenceConflictError",
    "ExpiryConflictError",
    "PayloadEncodingError",
    "OptionsConfigurationError",

    # Tokens
    "ExpireUnit",
    "ExistenceCondition",
    "InfinitySentinel",

    # Builder
    "CommandArgument",
    "CommandOption",
    "Options",
    "new_options",
    "build",
    "encode_payload",
    "with_key",
    "with_old_key",
    "with_key_value",
    "with_data",
    "with_count",
    "with_expire_second",
    "with_expire_millisecond",
    "with_exist",
    "with_not_exist",
    "with_range",
    "with_min_inf",
    "with_max_inf",
]
