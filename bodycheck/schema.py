"""
Schema operations for bodycheck.

Provides validate(), validate_detailed(), check() and to_pydantic().
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from datetime import datetime
from typing import Annotated, Any, Optional

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    StringConstraints,
    create_model,
)
from pydantic import Field as PydanticField

from .checks import (
    ArrayCheck,
    BooleanCheck,
    DateCheck,
    NumberCheck,
    ObjectCheck,
    PatternCheck,
    StringCheck,
    parse_date,
)
from .core import Field, Schema, to_schema
from .evaluator import evaluate_fields
from .types import Err, FieldError, Ok

logger = logging.getLogger(__name__)


def validate_detailed(payload: Any, schema: Schema) -> list[FieldError]:
    """
    Validate a payload against a schema, returning structured errors.

    A payload that is not a mapping is evaluated as an empty one, so every
    required field reports a presence error. Only a malformed schema raises.

    Raises:
        SchemaError: If ``schema`` is not a mapping of str to Field
    """
    fields = to_schema(schema)

    if not isinstance(payload, Mapping):
        logger.debug("Payload is %s, validating as empty", type(payload).__name__)
        payload = {}

    errors = evaluate_fields(payload, fields, (), [])
    logger.debug("Validated %d fields: %d errors", len(fields), len(errors))
    return errors


def validate(payload: Any, schema: Schema) -> list[str]:
    """
    Validate a payload against a schema.

    Args:
        payload: The request body (usually a dict decoded from JSON)
        schema: Mapping of field name to Field

    Returns:
        Error messages in schema order; empty when the payload is valid.

    Usage:
        schema = {
            "email": required().is_email(),
            "password": required().is_complex_password(),
            "age": optional().is_number(min=0),
        }
        errors = validate({"email": "ovidiu"}, schema)
        # ['"email" must be a valid email address', '"password" is required']
    """
    return [str(e) for e in validate_detailed(payload, schema)]


def check(payload: Any, schema: Schema) -> Ok[Any] | Err[list[FieldError]]:
    """
    Validate a payload and wrap the outcome in a result.

    Returns:
        Ok(payload) if validation passes
        Err([FieldError, ...]) if validation fails
    """
    errors = validate_detailed(payload, schema)
    return Err(errors) if errors else Ok(payload)


def to_pydantic(name: str, schema: Schema) -> type[BaseModel]:
    """
    Compile a schema to a Pydantic model.

    The first type-defining check of each field decides its annotation;
    custom predicates are not carried over. Patterns are applied with the
    check's own compiled regex, numbers and booleans are strict (no
    coercion from strings) and dates must be ISO strings, so the model accepts the same
    values as validate().

    Usage:
        User = to_pydantic("User", {
            "email": required().is_email(),
            "age": optional().is_number(min=0),
        })
        user = User(email="a@b.co")
    """
    fields: dict[str, Any] = {}

    for key, node in to_schema(schema).items():
        annotation = _extract_annotation(node, f"{name}_{key}")
        if node.is_required:
            fields[key] = (annotation, ...)
        else:
            fields[key] = (Optional[annotation], None)

    return create_model(name, **fields)


def _matches(pattern: re.Pattern[str], description: str) -> AfterValidator:
    def check_pattern(value: str) -> str:
        if pattern.search(value) is None:
            raise ValueError(description)
        return value

    return AfterValidator(check_pattern)


def _to_datetime(value: Any) -> datetime:
    parsed = parse_date(value) if isinstance(value, str) else None
    if parsed is None:
        raise ValueError("must be a valid ISO date string")
    return parsed


def _extract_annotation(node: Field, model_name: str) -> Any:
    """Extract the Pydantic annotation for a field from its checks."""
    for c in node.checks:
        match c:
            case StringCheck(min=lo, max=hi, not_empty=not_empty):
                if not_empty:
                    lo = max(lo or 0, 1)
                base: Any = Annotated[str, StringConstraints(min_length=lo, max_length=hi)]
            case PatternCheck(pattern=p, description=description):
                base = Annotated[str, _matches(p, description)]
            case NumberCheck(min=lo, max=hi):
                base = Annotated[
                    float, PydanticField(ge=lo, le=hi, strict=True, allow_inf_nan=False)
                ]
            case BooleanCheck():
                base = Annotated[bool, PydanticField(strict=True)]
            case DateCheck():
                base = Annotated[datetime, BeforeValidator(_to_datetime)]
            case ObjectCheck(schema=nested):
                base = to_pydantic(model_name, nested)
            case ArrayCheck(min=lo, max=hi):
                return Annotated[list[Any], PydanticField(min_length=lo, max_length=hi)]
            case _:
                continue

        if c.each:
            return list[base]  # type: ignore[valid-type]
        return base

    return Any
