"""
Validation package for Folio.

- errors: FieldError values and path helpers
- validator: recursive validation and batch reports

Usage:
    from folio.validation import validate

    result = validate(schema, raw_record)
"""

from .errors import FieldError, FieldErrorKind
from .validator import (
    DocumentResult,
    ValidationReport,
    ValidationResult,
    parse_date,
    validate,
    validate_batch,
)

__all__ = [
    "DocumentResult",
    "FieldError",
    "FieldErrorKind",
    "ValidationReport",
    "ValidationResult",
    "parse_date",
    "validate",
    "validate_batch",
]
