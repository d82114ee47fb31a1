"""
Context manager for validation configuration (e.g., null handling).
"""

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any

from .missing import MISSING

# Context variable for treating explicit None as an absent key
_null_as_missing: ContextVar[bool] = ContextVar("null_as_missing", default=False)


def is_null_missing() -> bool:
    """Check if explicit None values are currently treated as missing."""
    return _null_as_missing.get()


def normalize_missing(value: Any) -> Any:
    """Map None to MISSING when null_as_missing is enabled."""
    if value is None and _null_as_missing.get():
        return MISSING
    return value


@contextmanager
def validation_context(*, null_as_missing: bool = False):
    """
    Context manager for validation configuration.

    Args:
        null_as_missing: If True, a key present with value None is handled
               exactly like an absent key: optional fields skip all checks and
               required fields report a presence error. By default None is a
               present value and fails type checks.

    Example:
        from bodycheck import optional, validate, validation_context

        schema = {"nickname": optional().is_string()}

        validate({"nickname": None}, schema)
        # ['"nickname" must be a string']

        with validation_context(null_as_missing=True):
            validate({"nickname": None}, schema)  # []
    """
    token = _null_as_missing.set(null_as_missing)
    try:
        yield
    finally:
        _null_as_missing.reset(token)
