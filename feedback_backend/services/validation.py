"""Validation gate — turns payload violations into field-level messages.

Feedback payloads are checked by the ``FeedbackInput`` schema before they
reach the feedback service. Whatever pydantic reports is rewritten here
into short human-readable messages that each name the offending field,
e.g. ``"title" is not allowed to be empty``.
"""

from typing import Any, Dict, Iterable, List

from pydantic import ValidationError as PydanticValidationError

from feedback_backend.core.exceptions import ValidationError
from feedback_backend.schemas.schemas import FeedbackInput

_LOC_PREFIXES = {"body", "path", "query", "header", "cookie"}


def _field_name(loc: Iterable[Any]) -> str:
    names = [str(part) for part in loc if isinstance(part, str) and part not in _LOC_PREFIXES]
    return names[-1] if names else "value"


def format_error(error: Dict[str, Any]) -> str:
    """Render one pydantic error dict as a message naming its field."""
    field = _field_name(error.get("loc", ()))
    kind = error.get("type", "")
    ctx = error.get("ctx") or {}

    if kind == "missing":
        return f'"{field}" is required'
    if kind == "string_too_short":
        if ctx.get("min_length") == 1:
            return f'"{field}" is not allowed to be empty'
        return f'"{field}" length must be at least {ctx.get("min_length")} characters long'
    if kind == "string_too_long":
        return f'"{field}" length must be less than or equal to {ctx.get("max_length")} characters long'
    if kind == "string_type":
        return f'"{field}" must be a string'
    if kind in ("int_parsing", "int_type"):
        return f'"{field}" must be a number'
    if kind == "json_invalid":
        return '"body" must be valid JSON'
    if kind in ("model_attributes_type", "dict_type", "model_type"):
        return '"value" must be of type object'
    return f'"{field}" {error.get("msg", "is invalid")}'


def format_errors(errors: Iterable[Dict[str, Any]]) -> List[str]:
    """Render a list of pydantic errors, in order, one message per violation."""
    return [format_error(e) for e in errors]


def validate_feedback(payload: Any) -> FeedbackInput:
    """Check a raw feedback payload and return it as ``FeedbackInput``.

    Raises ``ValidationError`` carrying every violated rule. The payload
    itself is not modified.
    """
    try:
        return FeedbackInput.model_validate(payload)
    except PydanticValidationError as exc:
        raise ValidationError(format_errors(exc.errors()))
