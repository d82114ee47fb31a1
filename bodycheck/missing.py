"""
MISSING sentinel marking a key that is absent from the input payload.
"""

from enum import Enum
from typing import Any


class _Missing(Enum):
    """
    Sentinel for "key not present in the payload".

    Distinct from an explicit ``None``: ``{"a": None}`` has ``a`` present,
    ``{}`` has ``a`` missing.

    Examples:
        payload.get("email", MISSING) is MISSING
    """

    MISSING = "MISSING"

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = _Missing.MISSING


def is_missing(value: Any) -> bool:
    """Check if a value is the MISSING sentinel."""
    return value is MISSING
