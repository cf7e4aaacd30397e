"""Shared primitive types for the registry."""

from collections.abc import Callable
from datetime import UTC, datetime

Identity = str
"""Opaque caller identity, typically a hex account address."""

Clock = Callable[[], int]
"""Returns the current time as integer UNIX seconds."""

ZERO_IDENTITY: Identity = "0x0000000000000000000000000000000000000000"


def utc_now() -> datetime:
    """Return current UTC time."""
    return datetime.now(UTC)


def unix_now() -> int:
    """Return current UTC time as integer UNIX seconds."""
    return int(utc_now().timestamp())
