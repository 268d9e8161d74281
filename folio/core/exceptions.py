#!/usr/bin/env python3
"""
exceptions.py
--------------------
Custom exception classes for the Folio project.

Only construction-time problems and adapter failures are exceptions.
Field-level validation problems are returned as data
(see folio.validation.errors.FieldError) and never raised while a
document is being validated.

Exception Hierarchy:
    Exception (built-in)
    ├── SchemaDefinitionError - Invalid schema graph or registry table
    ├── UnknownCollectionError - Lookup of an unregistered collection
    ├── DocumentParseError - Raw document could not be read or parsed
    └── DocumentValidationError - Raised by ValidationResult.unwrap()

Usage:
    from folio.core.exceptions import SchemaDefinitionError

    try:
        registry = build_site_registry()
    except SchemaDefinitionError as e:
        logger.error(f"Invalid content configuration: {e}")
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from typing import TYPE_CHECKING, List, Sequence

if TYPE_CHECKING:
    from folio.validation.errors import FieldError


class SchemaDefinitionError(Exception):
    """
    Exception for invalid schema or collection definitions.

    Raised while schemas and the collection registry are being built:
    - Duplicate field names in an object schema
    - Empty or duplicated enumeration values
    - Constraints attached to a primitive kind they do not apply to
    - Defaults that do not satisfy their own schema
    - Duplicate collection names or includes of unknown collections

    The configuration cannot be used once this is raised, so callers
    should let it halt initialization.

    Examples:
        >>> raise SchemaDefinitionError("Duplicate field 'title' in object schema")
        >>> raise SchemaDefinitionError("Constraint 'positive' does not apply to string")
    """

    pass


class UnknownCollectionError(Exception):
    """
    Exception for lookups of a collection that was never registered.

    Attributes:
        name: The collection name that was requested

    Examples:
        >>> raise UnknownCollectionError("newsletters")
    """

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown collection: '{name}'")


class DocumentParseError(Exception):
    """
    Exception for content files that cannot be turned into raw records.

    Raised by the loader adapter, never by the validation engine:
    - YAML syntax errors
    - Unreadable files or bad encodings
    - Unsupported file extensions

    Examples:
        >>> raise DocumentParseError("Cannot parse YAML frontmatter: invalid syntax")
    """

    pass


class DocumentValidationError(Exception):
    """
    Exception carrying the field errors of a rejected document.

    Only raised when a caller explicitly asks for the typed record
    with ValidationResult.unwrap(); validation itself returns errors
    as data.

    Attributes:
        errors: The ordered list of FieldError objects
    """

    def __init__(self, errors: Sequence["FieldError"]) -> None:
        self.errors: List["FieldError"] = list(errors)
        summary = "; ".join(str(error) for error in self.errors[:3])
        if len(self.errors) > 3:
            summary += f"; ... ({len(self.errors) - 3} more)"
        super().__init__(f"{len(self.errors)} field error(s): {summary}")
