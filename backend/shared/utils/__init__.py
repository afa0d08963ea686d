"""
Utilities module: Exceptions, validators, validation error formatting.
"""

from shared.utils.exceptions import (
    NotFoundError,
    ValidationError,
    ConflictError,
    DuplicateEntityError,
    ExportError,
)
from shared.utils.validators import (
    validate_image_url,
    escape_like_pattern,
    sanitize_search_term,
)
from shared.utils.validation import format_validation_errors

__all__ = [
    # exceptions
    "NotFoundError",
    "ValidationError",
    "ConflictError",
    "DuplicateEntityError",
    "ExportError",
    # validators
    "validate_image_url",
    "escape_like_pattern",
    "sanitize_search_term",
    # validation
    "format_validation_errors",
]
