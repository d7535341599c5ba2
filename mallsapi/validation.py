"""
Malls API Backend — Validation Helpers
========================================

What:  Turns pydantic validation failures and malformed identifiers into the
       application's own exceptions.
Who:   Routes (identifier parsing), main.py (RequestValidationError handler),
       and any caller validating a raw field bag outside a request body.

Error message format:
    '"postalCode" String should match pattern \'^\\d{4}$\''
    The first failing field wins; its camelCase name is reported as `field`.
"""

import uuid
from typing import Any, Mapping, Optional, Sequence, Tuple, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from mallsapi.exceptions import NotFoundError, ValidationError

SchemaT = TypeVar("SchemaT", bound=BaseModel)

# Location prefixes FastAPI adds in front of the field name
_LOCATION_PREFIXES = {"body", "query", "path", "header", "cookie"}


def first_error(errors: Sequence[Mapping[str, Any]]) -> Tuple[str, Optional[str]]:
    """
    Reduces a list of pydantic error dicts to (message, field).

    Returns ("Validation failed", None) for an empty list.
    """
    if not errors:
        return "Validation failed", None

    error = errors[0]
    loc = [str(part) for part in error.get("loc", ()) if not isinstance(part, int)]
    if loc and loc[0] in _LOCATION_PREFIXES:
        loc = loc[1:]
    field = ".".join(loc) or None
    msg = error.get("msg", "Invalid value")

    if field is None:
        return msg, None
    return f'"{field}" {msg}', field


def parse_payload(schema: Type[SchemaT], raw: Any) -> SchemaT:
    """
    Validates a raw field bag against a schema.

    Raises:
        ValidationError: carrying the first failing field and its message
    """
    try:
        return schema.model_validate(raw)
    except PydanticValidationError as e:
        message, field = first_error(e.errors())
        raise ValidationError(message=message, field=field)


def parse_identifier(raw: str, resource: str) -> uuid.UUID:
    """
    Parses a path identifier. A malformed id can never resolve to a record,
    so it is reported as not-found rather than as bad input.
    """
    try:
        return uuid.UUID(raw)
    except (ValueError, TypeError, AttributeError):
        raise NotFoundError(resource=resource, resource_id=str(raw), message="Id is not valid")
