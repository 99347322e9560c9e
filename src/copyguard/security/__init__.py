"""Security utilities -- input validation at the API and CLI boundary."""
from .validators import (
    MAX_SUMMARY_LENGTH,
    ValidationError,
    validate_category,
    validate_in_choices,
    validate_length,
    validate_list_size,
    validate_not_empty,
    validate_timestamp,
)
