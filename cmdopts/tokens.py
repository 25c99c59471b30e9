"""
Literal tokens emitted into command argument lists.

The builder only emits these tokens; their meaning (conditional writes,
expiry units, unbounded score ranges) is a contract with the server.
"""

from enum import Enum


class ExpireUnit(str, Enum):
    """Expiry unit markers for SET-style commands."""

    SECONDS = "EX"
    MILLISECONDS = "PX"


class ExistenceCondition(str, Enum):
    """Existence preconditions for conditional writes."""

    EXIST = "XX"      # only if the key already exists
    NOT_EXIST = "NX"  # only if the key does not exist


class InfinitySentinel(str, Enum):
    """Unbounded endpoints for score range queries."""

    MIN = "-inf"
    MAX = "+inf"
