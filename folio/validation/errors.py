#!/usr/bin/env python3
"""
errors.py
---------
Field-level validation errors.

Field errors are values, not exceptions: the validator collects every
one of them for a document and hands them back in document order.

Paths use dotted field names and bracketed indices:
    hero.images[2].src
    [1].label            (root schema is an array)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional


class FieldErrorKind(str, Enum):
    """
    Categories of field errors.

    - MISSING_REQUIRED_FIELD: required field absent (or null)
    - TYPE_MISMATCH: value has the wrong type or cannot be coerced
    - INVALID_ENUM_VALUE: string not in the declared set
    - CONSTRAINT_VIOLATION: value failed a named constraint
    - UNRESOLVABLE_INCLUDE: an include source produced no documents
    """

    MISSING_REQUIRED_FIELD = "MissingRequiredField"
    TYPE_MISMATCH = "TypeMismatch"
    INVALID_ENUM_VALUE = "InvalidEnumValue"
    CONSTRAINT_VIOLATION = "ConstraintViolation"
    UNRESOLVABLE_INCLUDE = "UnresolvableInclude"

    @classmethod
    def choices(cls) -> List[str]:
        return [kind.value for kind in cls]


@dataclass(frozen=True)
class FieldError:
    """
    One problem at one location of a document.

    Attributes:
        path: Field path, e.g. "hero.images[2].src" ("" for the document root)
        kind: Error category
        message: Human-readable description
        constraint: Constraint name for CONSTRAINT_VIOLATION errors
        actual_value: Offending raw value, when there is one
    """

    path: str
    kind: FieldErrorKind
    message: str
    constraint: Optional[str] = None
    actual_value: Optional[Any] = None

    def __str__(self) -> str:
        location = self.path or "<document>"
        label = self.kind.value
        if self.constraint:
            label = f"{label}({self.constraint})"
        return f"{location}: {label}: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "path": self.path,
            "kind": self.kind.value,
            "message": self.message,
        }
        if self.constraint is not None:
            data["constraint"] = self.constraint
        if self.actual_value is not None:
            data["actual_value"] = self.actual_value
        return data


def join_field(parent: str, name: str) -> str:
    """
    Append a field name to a path.

    Examples:
        >>> join_field("", "title")
        'title'
        >>> join_field("hero.images[2]", "src")
        'hero.images[2].src'
    """
    return f"{parent}.{name}" if parent else name


def join_index(parent: str, index: int) -> str:
    """
    Append an element index to a path.

    Examples:
        >>> join_index("hero.images", 2)
        'hero.images[2]'
        >>> join_index("", 1)
        '[1]'
    """
    return f"{parent}[{index}]"


def describe_type(value: Any) -> str:
    """Name the raw type the way a content author would think of it."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, Mapping):
        return "object"
    if isinstance(value, (list, tuple)):
        return "array"
    return type(value).__name__
