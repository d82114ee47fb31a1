"""
Built-in field checks for bodycheck.

Each check is an immutable object closed over its own options. Checks never
raise on bad input; they append FieldErrors to the error list they are given.
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone
from typing import TYPE_CHECKING, Any

from .evaluator import evaluate_fields
from .missing import MISSING
from .types import ErrorKind, FieldError, Path, format_path

if TYPE_CHECKING:
    from .core import Schema

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+\Z")
PASSWORD_PATTERN = re.compile(
    r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)(?=.*[@$!%*?&])[A-Za-z\d@$!%*?&]{8,}\Z"
)
PASSWORD_DESCRIPTION = (
    "must be a strong password (at least 8 characters with uppercase, "
    "lowercase, number and special character)"
)
PATTERN_DESCRIPTION = "must match the required format"


def report(errors: list[FieldError], path: Path, kind: ErrorKind, text: str) -> None:
    """Append an error whose message is prefixed with the quoted location."""
    errors.append(FieldError(path, kind, f'"{format_path(path)}" {text}'))


def is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _check_bounds(lower: Any, upper: Any) -> None:
    if lower is not None and upper is not None and lower > upper:
        raise ValueError(f"min ({lower}) must not be greater than max ({upper})")


@dataclass(frozen=True, slots=True)
class Check:
    """A single predicate applied to one field value."""

    def apply(self, value: Any, path: Path, errors: list[FieldError]) -> None:
        """Append errors for ``value`` at ``path``; subclasses must override."""
        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class PresenceCheck(Check):
    """Fails when the key is absent from the payload."""

    def apply(self, value: Any, path: Path, errors: list[FieldError]) -> None:
        if value is MISSING:
            report(errors, path, ErrorKind.PRESENCE, "is required")


@dataclass(frozen=True, slots=True)
class ElementCheck(Check):
    """
    Base for checks supporting ``each``.

    With ``each`` the value must be a list (or tuple) and every element is
    checked at ``path + (index,)``. A non-sequence value yields one TYPE error
    instead of per-element checks.
    """

    each: bool = field(default=False, kw_only=True)

    def apply(self, value: Any, path: Path, errors: list[FieldError]) -> None:
        if not self.each:
            self.check_value(value, path, errors)
            return

        if not is_sequence(value):
            report(errors, path, ErrorKind.TYPE, "must be an array")
            return

        for i, item in enumerate(value):
            self.check_value(item, (*path, i), errors)

    def check_value(self, value: Any, path: Path, errors: list[FieldError]) -> None:
        """Check a single element; subclasses must override."""
        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class StringCheck(ElementCheck):
    min: int | None = None
    max: int | None = None
    not_empty: bool = False

    def __post_init__(self) -> None:
        _check_bounds(self.min, self.max)

    def check_value(self, value: Any, path: Path, errors: list[FieldError]) -> None:
        if not isinstance(value, str):
            report(errors, path, ErrorKind.TYPE, "must be a string")
            return

        if self.not_empty and len(value) == 0:
            report(errors, path, ErrorKind.LENGTH, "must not be empty")
        if self.min is not None and len(value) < self.min:
            report(
                errors, path, ErrorKind.LENGTH, f"must have at least {self.min} characters"
            )
        if self.max is not None and len(value) > self.max:
            report(
                errors, path, ErrorKind.LENGTH, f"must have at most {self.max} characters"
            )


@dataclass(frozen=True, slots=True)
class PatternCheck(ElementCheck):
    """
    String in which a regular expression must match.

    The pattern is applied with ``search``, so it is unanchored unless the
    pattern itself anchors; the default patterns are anchored.
    """

    pattern: re.Pattern[str]
    description: str = PATTERN_DESCRIPTION

    def check_value(self, value: Any, path: Path, errors: list[FieldError]) -> None:
        if not isinstance(value, str):
            report(errors, path, ErrorKind.TYPE, "must be a string")
            return

        if self.pattern.search(value) is None:
            report(errors, path, ErrorKind.FORMAT, self.description)


@dataclass(frozen=True, slots=True)
class EmailCheck(PatternCheck):
    pattern: re.Pattern[str] = EMAIL_PATTERN
    description: str = "must be a valid email address"


@dataclass(frozen=True, slots=True)
class ComplexPasswordCheck(PatternCheck):
    pattern: re.Pattern[str] = PASSWORD_PATTERN
    description: str = PASSWORD_DESCRIPTION


@dataclass(frozen=True, slots=True)
class NumberCheck(ElementCheck):
    min: float | None = None
    max: float | None = None

    def __post_init__(self) -> None:
        _check_bounds(self.min, self.max)

    def check_value(self, value: Any, path: Path, errors: list[FieldError]) -> None:
        if (
            not isinstance(value, (int, float))
            or isinstance(value, bool)
            or (isinstance(value, float) and not math.isfinite(value))
        ):
            report(errors, path, ErrorKind.TYPE, "must be a number")
            return

        if self.min is not None and value < self.min:
            report(errors, path, ErrorKind.RANGE, f"must be at least {self.min}")
        if self.max is not None and value > self.max:
            report(errors, path, ErrorKind.RANGE, f"must be at most {self.max}")


@dataclass(frozen=True, slots=True)
class BooleanCheck(ElementCheck):
    def check_value(self, value: Any, path: Path, errors: list[FieldError]) -> None:
        if not isinstance(value, bool):
            report(errors, path, ErrorKind.TYPE, "must be true or false")


def parse_date(value: str) -> datetime | None:
    """
    Parse an ISO-8601 date or date-time string.

    A trailing "Z" is read as UTC. Returns None when the text is not a date.
    """
    text = value
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def _as_datetime(bound: date | datetime) -> datetime:
    if isinstance(bound, datetime):
        return bound
    return datetime.combine(bound, time.min)


def _align(a: datetime, b: datetime) -> tuple[datetime, datetime]:
    """Make two datetimes comparable; naive values are read as UTC."""
    if (a.tzinfo is None) == (b.tzinfo is None):
        return a, b
    if a.tzinfo is None:
        return a.replace(tzinfo=timezone.utc), b
    return a, b.replace(tzinfo=timezone.utc)


@dataclass(frozen=True, slots=True)
class DateCheck(ElementCheck):
    min: date | datetime | None = None
    max: date | datetime | None = None

    def __post_init__(self) -> None:
        if self.min is not None and self.max is not None:
            _check_bounds(*_align(_as_datetime(self.min), _as_datetime(self.max)))

    def check_value(self, value: Any, path: Path, errors: list[FieldError]) -> None:
        parsed = parse_date(value) if isinstance(value, str) else None
        if parsed is None:
            report(errors, path, ErrorKind.FORMAT, "must be a valid ISO date string")
            return

        if self.min is not None:
            when, bound = _align(parsed, _as_datetime(self.min))
            if when < bound:
                report(
                    errors, path, ErrorKind.RANGE, f"must not be before {self.min.isoformat()}"
                )
        if self.max is not None:
            when, bound = _align(parsed, _as_datetime(self.max))
            if when > bound:
                report(
                    errors, path, ErrorKind.RANGE, f"must not be after {self.max.isoformat()}"
                )


@dataclass(frozen=True, slots=True)
class ArrayCheck(Check):
    """List (or tuple) value with optional item-count bounds."""

    min: int | None = None
    max: int | None = None

    def __post_init__(self) -> None:
        _check_bounds(self.min, self.max)

    def apply(self, value: Any, path: Path, errors: list[FieldError]) -> None:
        if not is_sequence(value):
            report(errors, path, ErrorKind.TYPE, "must be an array")
            return

        if self.min is not None and len(value) < self.min:
            report(errors, path, ErrorKind.LENGTH, f"must have at least {self.min} items")
        if self.max is not None and len(value) > self.max:
            report(errors, path, ErrorKind.LENGTH, f"must have at most {self.max} items")


@dataclass(frozen=True, slots=True)
class ObjectCheck(ElementCheck):
    """
    Mapping value validated against a nested schema.

    A value that is not a mapping reports TYPE and is then evaluated as an
    empty mapping, so every nested required field also reports its presence
    error.
    """

    schema: Schema

    def check_value(self, value: Any, path: Path, errors: list[FieldError]) -> None:
        if not isinstance(value, Mapping):
            report(errors, path, ErrorKind.TYPE, "must be an object")
            value = {}

        evaluate_fields(value, self.schema, path, errors)


@dataclass(frozen=True, slots=True)
class PredicateCheck(Check):
    """Caller-defined predicate; a falsy result or an exception is an error."""

    fn: Callable[[Any], Any]
    message: str | None = None

    def apply(self, value: Any, path: Path, errors: list[FieldError]) -> None:
        try:
            passed = self.fn(value)
        except Exception as e:
            report(errors, path, ErrorKind.CUSTOM, f"is invalid: {e}")
            return

        if not passed:
            report(errors, path, ErrorKind.CUSTOM, self.message or "is invalid")
