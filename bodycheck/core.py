"""
Validator node for bodycheck.

Provides the Field builder with a fluent, chainable API and the module-level
starters field(), required() and optional().
"""

from __future__ import annotations

import dataclasses
import logging
import re
from collections.abc import Callable, Mapping
from datetime import date, datetime
from typing import Any

from .checks import (
    EMAIL_PATTERN,
    PASSWORD_DESCRIPTION,
    PASSWORD_PATTERN,
    PATTERN_DESCRIPTION,
    ArrayCheck,
    BooleanCheck,
    Check,
    ComplexPasswordCheck,
    DateCheck,
    EmailCheck,
    NumberCheck,
    ObjectCheck,
    PredicateCheck,
    PresenceCheck,
    StringCheck,
)
from .missing import MISSING
from .types import FieldError, Path, SchemaError

logger = logging.getLogger(__name__)

Schema = Mapping[str, "Field"]


@dataclasses.dataclass(slots=True)
class Field:
    """
    Mutable validator node for one field.

    Built once by chaining, then only read during validation. Checks run in
    declaration order and all of them run; each check stops on its own type
    failure.

    Usage:
        required().is_string(min=5, max=20)
        optional().is_number(min=0, each=True)
        required().is_object({"name": required().is_string()})
    """

    is_required: bool = False
    checks: list[Check] = dataclasses.field(default_factory=list)

    def required(self) -> Field:
        """Mark the field as mandatory; a missing key reports a presence error."""
        self.is_required = True
        if not any(isinstance(c, PresenceCheck) for c in self.checks):
            self.checks.insert(0, PresenceCheck())
        return self

    def optional(self) -> Field:
        """Mark the field as not mandatory; a missing key skips every check."""
        self.is_required = False
        return self

    def add(self, check: Check) -> Field:
        """Append an arbitrary check."""
        if not isinstance(check, Check):
            raise SchemaError(f"Expected a Check, got {type(check).__name__}")
        self.checks.append(check)
        return self

    def is_string(
        self,
        *,
        min: int | None = None,
        max: int | None = None,
        not_empty: bool = False,
        each: bool = False,
    ) -> Field:
        return self.add(StringCheck(min=min, max=max, not_empty=not_empty, each=each))

    def is_email(
        self, *, each: bool = False, pattern: str | re.Pattern[str] = EMAIL_PATTERN
    ) -> Field:
        return self.add(EmailCheck(pattern=re.compile(pattern), each=each))

    def is_complex_password(
        self,
        *,
        each: bool = False,
        pattern: str | re.Pattern[str] = PASSWORD_PATTERN,
        message: str | None = None,
    ) -> Field:
        """
        Validate a password against the default strength policy or ``pattern``.

        A custom pattern without ``message`` reports a neutral format error,
        since the default text describes the default policy only.
        """
        compiled = re.compile(pattern)
        if message is None:
            message = (
                PASSWORD_DESCRIPTION if compiled is PASSWORD_PATTERN else PATTERN_DESCRIPTION
            )
        return self.add(
            ComplexPasswordCheck(pattern=compiled, description=message, each=each)
        )

    def is_number(
        self,
        *,
        min: float | None = None,
        max: float | None = None,
        each: bool = False,
    ) -> Field:
        return self.add(NumberCheck(min=min, max=max, each=each))

    def is_boolean(self, *, each: bool = False) -> Field:
        return self.add(BooleanCheck(each=each))

    def is_date(
        self,
        *,
        min: date | datetime | None = None,
        max: date | datetime | None = None,
        each: bool = False,
    ) -> Field:
        return self.add(DateCheck(min=min, max=max, each=each))

    def is_array(self, *, min: int | None = None, max: int | None = None) -> Field:
        return self.add(ArrayCheck(min=min, max=max))

    def is_object(self, schema: Schema, *, each: bool = False) -> Field:
        """
        Validate a nested mapping (or, with ``each``, a list of mappings).

        Raises:
            SchemaError: If ``schema`` is not a mapping of str to Field
        """
        nested = to_schema(schema)
        logger.debug("Declared nested schema with %d fields", len(nested))
        return self.add(ObjectCheck(schema=nested, each=each))

    def custom(self, fn: Callable[[Any], Any], message: str | None = None) -> Field:
        """
        Validate with an arbitrary predicate.

        Usage:
            required().is_number().custom(lambda x: x % 2 == 0, "must be even")
        """
        if not callable(fn):
            raise SchemaError(f"Expected a callable, got {type(fn).__name__}")
        return self.add(PredicateCheck(fn=fn, message=message))

    def validate(
        self, value: Any, path: Path | str, errors: list[FieldError]
    ) -> list[FieldError]:
        """
        Apply every check to ``value`` and return ``errors``.

        A MISSING value skips all checks when the field is optional and runs
        only the presence check when it is required.
        """
        if isinstance(path, str):
            path = (path,)

        if value is MISSING:
            if not self.is_required:
                return errors
            for check in self.checks:
                if isinstance(check, PresenceCheck):
                    check.apply(value, path, errors)
            return errors

        for check in self.checks:
            check.apply(value, path, errors)

        return errors


def field() -> Field:
    """Start declaring a field (optional until required() is called)."""
    return Field()


def required() -> Field:
    """Start declaring a mandatory field."""
    return Field().required()


def optional() -> Field:
    """Start declaring a field that may be absent."""
    return Field().optional()


def to_schema(schema: Any) -> dict[str, Field]:
    """
    Check that a value is a well-formed schema and return a copy of it.

    Raises:
        SchemaError: If ``schema`` is not a mapping of str to Field
    """
    if not isinstance(schema, Mapping):
        raise SchemaError(f"Schema must be a mapping, got {type(schema).__name__}")

    for key, node in schema.items():
        if not isinstance(key, str):
            raise SchemaError(f"Schema keys must be strings, got {key!r}")
        if not isinstance(node, Field):
            raise SchemaError(
                f"Schema value for {key!r} must be a Field, got {type(node).__name__}"
            )

    return dict(schema)
