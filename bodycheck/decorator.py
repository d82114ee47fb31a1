"""
The @verify_body decorator for rejecting invalid request payloads.
"""

import inspect
import logging
from functools import wraps
from typing import Any, Callable

from .core import Schema, to_schema
from .schema import validate

logger = logging.getLogger(__name__)


class BadRequest(Exception):
    """
    Raised by @verify_body when the payload fails validation.

    Carries every error message so a web framework's error handler can turn
    it into a 400 response with ``to_dict()`` as the body.
    """

    status_code = 400

    def __init__(self, errors: list[str]):
        super().__init__(f"Request body failed validation ({len(errors)} errors)")
        self.errors = errors

    def to_dict(self) -> dict[str, list[str]]:
        return {"errors": list(self.errors)}


def _extract_body(args: tuple, kwargs: dict) -> Any:
    if "body" in kwargs:
        return kwargs["body"]
    if args:
        return args[0]
    return None


def verify_body(schema: Schema) -> Callable:
    """
    Decorator that validates a handler's payload before calling it.

    The payload is the ``body`` keyword argument if given, otherwise the first
    positional argument. Works for both sync and async handlers.

    Usage:
        @verify_body({"email": required().is_email()})
        def register(body):
            ...

        @verify_body({"email": required().is_email()})
        async def register(body):
            ...

    Raises:
        BadRequest: If the payload has validation errors
        SchemaError: At decoration time, if ``schema`` is malformed
    """
    fields = to_schema(schema)

    def verify(args: tuple, kwargs: dict) -> None:
        errors = validate(_extract_body(args, kwargs), fields)
        if errors:
            logger.info("Rejected request body with %d errors", len(errors))
            raise BadRequest(errors)

    def decorator(func: Callable) -> Callable:
        if inspect.iscoroutinefunction(func):

            @wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                verify(args, kwargs)
                return await func(*args, **kwargs)

            return async_wrapper

        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            verify(args, kwargs)
            return func(*args, **kwargs)

        return wrapper

    return decorator
