"""
Functional options for assembling key-value command arguments.

An ``Options`` record is created empty, mutated by an ordered sequence of
option functions (``with_key``, ``with_expire_second``, ...) and turned into
a positional argument list by ``build``. The list is meant to be passed
verbatim to a client's command call, for example::

    args = new_options(with_key("session:42"), with_data(payload),
                       with_expire_second(300), with_not_exist()).build()
    client.execute_command("SET", *args)

Validation failures raised while an option is applied are recorded on the
record and reported together by ``build``, unless the configuration asks
for them to be raised immediately (``fail_fast``).
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Union

from .config import (
    ExistenceConflictError,
    ExpiryConflictError,
    OptionsConfig,
    OptionValidationError,
    PayloadEncodingError,
    get_config,
)
from .payload import encode_payload
from .tokens import ExistenceCondition, ExpireUnit, InfinitySentinel

logger = logging.getLogger(__name__)

# Every entry of a built argument list is one of these.
CommandArgument = Union[str, int, bytes]


@dataclass
class Options:
    """
    Mutable record of command options.

    Fields left at their zero value contribute nothing to the built
    argument list.

    The global configuration is only looked up when it is needed, when a
    payload is encoded or an invalid option is applied.
    """

    key: str = ""
    old_key: str = ""
    key_value: str = ""
    data: Any = None
    is_count: bool = False
    count: int = 0
    expire_second: int = 0
    expire_millisecond: int = 0
    exist: bool = False
    not_exist: bool = False
    is_range: bool = False
    range_lower: int = 0
    range_upper: int = 0
    min_inf: str = ""
    max_inf: str = ""
    errors: List[OptionValidationError] = field(default_factory=list)
    config: Optional[OptionsConfig] = field(default=None, repr=False, compare=False)

    def set_key(self, key: str) -> None:
        if not key:
            raise OptionValidationError("key is empty", field="key")
        self.key = key

    def set_old_key(self, key: str) -> None:
        if not key:
            raise OptionValidationError("old key is empty", field="old_key")
        self.old_key = key

    def set_key_value(self, key_value: str) -> None:
        if not key_value:
            raise OptionValidationError("key value is empty", field="key_value")
        self.key_value = key_value

    def set_data(self, data: Any) -> None:
        if data is None:
            raise OptionValidationError("data of key is empty", field="data")
        self.data = data

    def set_count(self, count: int) -> None:
        self.is_count = True
        self.count = count

    def set_expire_second(self, exp: int) -> None:
        if exp < 0:
            raise OptionValidationError(
                f"expire in seconds must not be negative, got {exp}", field="expire_second"
            )
        self.expire_second = exp

    def set_expire_millisecond(self, exp: int) -> None:
        if exp < 0:
            raise OptionValidationError(
                f"expire in milliseconds must not be negative, got {exp}",
                field="expire_millisecond",
            )
        self.expire_millisecond = exp

    def set_exist(self, exist: bool) -> None:
        self.exist = exist

    def set_not_exist(self, not_exist: bool) -> None:
        self.not_exist = not_exist

    def set_range(self, lower: int, upper: int) -> None:
        self.is_range = True
        self.range_lower = lower
        self.range_upper = upper

    def apply(self, *options: "CommandOption") -> "Options":
        """
        Apply option functions in order.

        Args:
            *options: Option functions to apply

        Returns:
            Self for chaining
        """
        for option in options:
            option(self)
        return self

    def build(self) -> List[CommandArgument]:
        """
        Build the positional argument list.

        Arguments are emitted in a fixed order: old key, key, count, key value,
        payload, seconds expiry, milliseconds expiry, existence condition,
        range bounds, min sentinel, max sentinel.

        Returns:
            List[CommandArgument]: Arguments for the command

        Raises:
            OptionValidationError: If any option was applied with an invalid value
            ExistenceConflictError: If both exist and not-exist are set
            ExpiryConflictError: If both expiry units are set
            PayloadEncodingError: If the payload cannot be encoded
        """
        if self.errors:
            details = "; ".join(str(e) for e in self.errors)
            raise OptionValidationError(
                f"{len(self.errors)} invalid option(s): {details}", errors=self.errors
            )

        if self.exist and self.not_exist:
            raise ExistenceConflictError(
                "conflicting existence precondition: choose exist or not exist, not both"
            )

        if self.expire_second > 0 and self.expire_millisecond > 0:
            raise ExpiryConflictError(
                "conflicting expiry unit: choose expire in seconds or in milliseconds, not both"
            )

        args: List[CommandArgument] = []

        if self.old_key:
            args.append(self.old_key)

        if self.key:
            args.append(self.key)

        if self.is_count:
            args.append(self.count)

        if self.key_value:
            args.append(self.key_value)

        if self.data is not None:
            try:
                args.append(encode_payload(self.data, self.config))
            except (TypeError, ValueError, RecursionError) as e:
                logger.error(f"Failed to encode payload of type {type(self.data).__name__}: {e}")
                raise PayloadEncodingError(f"encoding error: {e}", partial=args) from e

        if self.expire_second > 0:
            args.extend([ExpireUnit.SECONDS.value, self.expire_second])

        if self.expire_millisecond > 0:
            args.extend([ExpireUnit.MILLISECONDS.value, self.expire_millisecond])

        if self.exist:
            args.append(ExistenceCondition.EXIST.value)

        if self.not_exist:
            args.append(ExistenceCondition.NOT_EXIST.value)

        if self.is_range:
            args.extend([self.range_lower, self.range_upper])

        if self.min_inf:
            args.append(self.min_inf)

        if self.max_inf:
            args.append(self.max_inf)

        logger.debug(f"Built {len(args)} command argument(s)")
        return args


CommandOption = Callable[[Options], None]


def _guarded(options: Options, setter: Callable[..., None], *args: Any) -> None:
    """Run a setter, recording its validation error unless fail_fast is set."""
    try:
        setter(*args)
    except OptionValidationError as e:
        config = options.config or get_config()
        if config.fail_fast:
            raise
        logger.warning(f"Recording invalid option {e.field}: {e}")
        options.errors.append(e)


def new_options(*options: CommandOption, config: Optional[OptionsConfig] = None) -> Options:
    """
    Create an empty options record, applying any option functions given.

    Args:
        *options: Option functions to apply in order
        config: Builder configuration, defaults to the global config

    Returns:
        Options: The configured record
    """
    return Options(config=config).apply(*options)


def build(options: Optional[Options]) -> List[CommandArgument]:
    """Build the argument list for a record; a missing record builds nothing."""
    if options is None:
        return []
    return options.build()


def with_key(key: str) -> CommandOption:
    """Set the primary key."""
    def option(options: Options) -> None:
        _guarded(options, options.set_key, key)
    return option


def with_old_key(key: str) -> CommandOption:
    """Set the source key of a rename-style command."""
    def option(options: Options) -> None:
        _guarded(options, options.set_old_key, key)
    return option


def with_key_value(key_value: str) -> CommandOption:
    """Set the field or member name inside a composite key."""
    def option(options: Options) -> None:
        _guarded(options, options.set_key_value, key_value)
    return option


def with_data(data: Any) -> CommandOption:
    """Set the payload, encoded as JSON at build time."""
    def option(options: Options) -> None:
        _guarded(options, options.set_data, data)
    return option


def with_count(count: int) -> CommandOption:
    """Add a count argument (e.g. for LREM). Negative counts are allowed."""
    def option(options: Options) -> None:
        options.set_count(count)
    return option


def with_expire_second(exp: int) -> CommandOption:
    """Expire the key after ``exp`` seconds (EX)."""
    def option(options: Options) -> None:
        _guarded(options, options.set_expire_second, exp)
    return option


def with_expire_millisecond(exp: int) -> CommandOption:
    """Expire the key after ``exp`` milliseconds (PX)."""
    def option(options: Options) -> None:
        _guarded(options, options.set_expire_millisecond, exp)
    return option


def with_exist() -> CommandOption:
    """Only run the command if the key already exists (XX)."""
    def option(options: Options) -> None:
        options.set_exist(True)
    return option


def with_not_exist() -> CommandOption:
    """Only run the command if the key does not exist (NX)."""
    def option(options: Options) -> None:
        options.set_not_exist(True)
    return option


def with_range(lower: int, upper: int) -> CommandOption:
    """Add inclusive range bounds. Bounds are not checked against each other."""
    def option(options: Options) -> None:
        options.set_range(lower, upper)
    return option


def with_min_inf() -> CommandOption:
    """Add the -inf lower sentinel."""
    def option(options: Options) -> None:
        options.min_inf = InfinitySentinel.MIN.value
    return option


def with_max_inf() -> CommandOption:
    """Add the +inf upper sentinel."""
    def option(options: Options) -> None:
        options.max_inf = InfinitySentinel.MAX.value
    return option
