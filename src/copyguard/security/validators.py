"""
Input Validators - checks for external input at the API and CLI boundary.

Parse at the boundary: summaries, article lists and query parameters are
validated before they reach the analyzer, so the analyzer itself only ever
deals with well-formed (if poor) text.
"""

import logging
from datetime import datetime, timezone

logger = logging.getLogger(__name__)

MAX_TEXT_LENGTH = 200_000
# summaries are tens of words; anything longer is not a summary
MAX_SUMMARY_LENGTH = 5_000
MAX_CATEGORY_LENGTH = 100


class ValidationError(ValueError):
    """Raised when input validation fails. Contains a user-friendly message."""

    pass


def validate_not_empty(value: str, field_name: str = "input") -> str:
    """Validate that a string is not empty or whitespace-only."""
    if not value or not value.strip():
        raise ValidationError(f"{field_name} cannot be empty")
    return value.strip()


def validate_length(
    value: str,
    field_name: str = "input",
    min_length: int = 0,
    max_length: int = MAX_TEXT_LENGTH,
) -> str:
    """Validate string length is within bounds."""
    if len(value) < min_length:
        raise ValidationError(f"{field_name} must be at least {min_length} characters")
    if len(value) > max_length:
        raise ValidationError(f"{field_name} must be at most {max_length} characters")
    return value


def validate_in_choices(value: str, choices: list[str], field_name: str = "value") -> str:
    """Validate that a value is one of the allowed choices."""
    if value not in choices:
        raise ValidationError(f"{field_name} must be one of: {', '.join(choices)}")
    return value


def validate_category(value: str, field_name: str = "category") -> str:
    """Category names are free text (often Korean) but short and printable."""
    value = validate_not_empty(value, field_name)
    validate_length(value, field_name, max_length=MAX_CATEGORY_LENGTH)
    if any(not ch.isprintable() for ch in value):
        raise ValidationError(f"{field_name} contains control characters")
    return value


def validate_list_size(
    items: list,
    field_name: str = "list",
    max_items: int = 100,
) -> list:
    """Validate that a list does not exceed a maximum number of items."""
    if len(items) > max_items:
        raise ValidationError(
            f"{field_name} cannot have more than {max_items} items (got {len(items)})"
        )
    return items


def validate_timestamp(value: str, field_name: str = "timestamp") -> datetime:
    """Parse an ISO 8601 timestamp. Naive values are taken as UTC."""
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        raise ValidationError(f"{field_name} must be an ISO 8601 timestamp (got '{value}')")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
