"""
bodycheck - Fluent schema validation for request payloads.

Usage:
    from bodycheck import required, optional, validate

    schema = {
        "email": required().is_email(),
        "password": required().is_complex_password(),
        "users": optional().is_object(
            {"firstName": required().is_string(min=5, max=20)},
            each=True,
        ),
    }

    errors = validate(data, schema)
"""

from .checks import EMAIL_PATTERN, PASSWORD_PATTERN, Check
from .context import is_null_missing, validation_context
from .core import Field, Schema, field, optional, required
from .decorator import BadRequest, verify_body
from .missing import MISSING, is_missing
from .schema import check, to_pydantic, validate, validate_detailed
from .types import Err, ErrorKind, FieldError, Ok, SchemaError

__all__ = [
    # Result types
    "Ok",
    "Err",
    # Errors
    "ErrorKind",
    "FieldError",
    "SchemaError",
    "BadRequest",
    # Declaration
    "Field",
    "Schema",
    "Check",
    "field",
    "required",
    "optional",
    "EMAIL_PATTERN",
    "PASSWORD_PATTERN",
    # Evaluation
    "validate",
    "validate_detailed",
    "check",
    "to_pydantic",
    "verify_body",
    # Configuration
    "validation_context",
    "is_null_missing",
    "MISSING",
    "is_missing",
]
