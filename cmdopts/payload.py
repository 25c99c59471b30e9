"""
Payload encoding for command arguments.

Payloads are encoded as compact JSON bytes. Pydantic models, dataclasses,
dates and decimals are converted to JSON-compatible values first; anything
else the json module cannot represent raises.
"""

import dataclasses
import json
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel

from .config import OptionsConfig, get_config


def _to_jsonable(value: Any) -> Any:
    """Convert values json.dumps does not know about, or raise TypeError."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (set, frozenset)):
        return list(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def encode_payload(data: Any, config: Optional[OptionsConfig] = None) -> bytes:
    """
    Encode a payload as JSON bytes.

    Args:
        data: Value to encode
        config: Builder configuration, defaults to the global config

    Returns:
        bytes: Encoded payload

    Raises:
        TypeError: If the payload contains an unencodable value
        ValueError: If the payload is cyclic or contains NaN/Infinity
    """
    config = config or get_config()
    text = json.dumps(
        data,
        default=_to_jsonable,
        separators=(",", ":"),
        sort_keys=config.json_sort_keys,
        ensure_ascii=config.json_ensure_ascii,
        allow_nan=False,
    )
    return text.encode(config.payload_encoding)
