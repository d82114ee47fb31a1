"""
Recursive schema evaluation shared by the top-level entry points and nested
object checks.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from .context import normalize_missing
from .missing import MISSING
from .types import FieldError, Path

if TYPE_CHECKING:
    from .core import Schema


def evaluate_fields(
    payload: Mapping[str, Any],
    schema: Schema,
    path: Path,
    errors: list[FieldError],
) -> list[FieldError]:
    """
    Validate every field of ``schema`` against ``payload``.

    Fields are visited in schema order. An absent key is passed on as MISSING;
    each node decides whether that skips it (optional) or reports presence
    (required). Errors are appended to ``errors``, which is returned.
    """
    for key, node in schema.items():
        value = normalize_missing(payload.get(key, MISSING))
        node.validate(value, (*path, key), errors)

    return errors
