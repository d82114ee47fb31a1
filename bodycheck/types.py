"""
Type definitions for bodycheck.

Provides a minimal Result type (Ok/Err), the error kinds reported by field
checks and the structured error entry.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Success result containing a value."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Error result containing an error value."""

    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True


# Type aliases
Path = tuple[str | int, ...]


class ErrorKind(str, Enum):
    """The rule a field violated."""

    PRESENCE = "presence"
    TYPE = "type"
    LENGTH = "length"
    RANGE = "range"
    FORMAT = "format"
    CUSTOM = "custom"


def format_path(path: Path) -> str:
    """Dot-join a path: ("users", 0, "firstName") -> "users.0.firstName"."""
    return ".".join(str(part) for part in path)


@dataclass(frozen=True, slots=True)
class FieldError:
    """
    A single validation failure.

    ``str(error)`` is the human-readable message, which always starts with the
    quoted field location, e.g. ``"users.1.firstName" must be a string``.
    """

    path: Path
    kind: ErrorKind
    message: str

    @property
    def location(self) -> str:
        return format_path(self.path)

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> dict[str, str]:
        return {"path": self.location, "rule": self.kind.value, "message": self.message}


class SchemaError(TypeError):
    """Raised when a schema is malformed at declaration time."""
