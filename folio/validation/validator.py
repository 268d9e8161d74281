#!/usr/bin/env python3
"""
validator.py
------------
Recursive validation of raw, untyped records against schema nodes.

The validator walks the schema depth-first in declared field order and
never stops at the first problem: every field error in a document is
collected before returning. A document is all-or-nothing; when any error
exists no typed record is returned.

Validation touches no shared mutable state, so any number of documents
may be validated concurrently against the same schema.

Usage:
    from folio.schema import builders as s
    from folio.validation.validator import validate

    result = validate(s.obj({"title": s.string()}), {"title": "Hi"})
    if result.ok:
        record = result.value
    else:
        for error in result.errors:
            print(error)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

# --- Local imports ---
from folio.core.exceptions import DocumentValidationError, SchemaDefinitionError
from folio.core.logging_manager import FolioLogger, safe_logger
from folio.schema import constraints as c
from folio.schema.nodes import ArrayNode, EnumNode, ObjectNode, PrimitiveNode, SchemaNode
from folio.validation.errors import (
    FieldError,
    FieldErrorKind,
    describe_type,
    join_field,
    join_index,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationResult:
    """
    Outcome of validating one document.

    Exactly one of ``value`` (the validated record) or ``errors`` is
    meaningful: ``ok`` tells which.
    """

    value: Any = None
    errors: Tuple[FieldError, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.errors

    def unwrap(self) -> Any:
        """
        Return the validated record.

        Raises:
            DocumentValidationError: If the document had field errors
        """
        if self.errors:
            raise DocumentValidationError(self.errors)
        return self.value


def validate(node: SchemaNode, raw: Any) -> ValidationResult:
    """
    Validate a raw value against a schema node.

    Args:
        node: Root schema node
        raw: Untyped input (mapping/sequence/scalar tree, e.g. parsed YAML)

    Returns:
        ValidationResult with the typed record or every field error found
    """
    if raw is None and not node.is_required:
        return ValidationResult(value=node.default if node.has_default else None)

    errors: List[FieldError] = []
    value = _validate_node(node, raw, "", errors)
    if errors:
        return ValidationResult(errors=tuple(errors))
    return ValidationResult(value=value)


# ----- Node walkers -----

def _validate_node(node: SchemaNode, raw: Any, path: str, errors: List[FieldError]) -> Any:
    if isinstance(node, PrimitiveNode):
        return _validate_primitive(node, raw, path, errors)
    if isinstance(node, EnumNode):
        return _validate_enum(node, raw, path, errors)
    if isinstance(node, ObjectNode):
        return _validate_object(node, raw, path, errors)
    if isinstance(node, ArrayNode):
        return _validate_array(node, raw, path, errors)
    raise SchemaDefinitionError(
        f"Cannot validate against {type(node).__name__} at '{path or '<root>'}'"
    )


def _type_mismatch(path: str, expected: str, raw: Any) -> FieldError:
    return FieldError(
        path=path,
        kind=FieldErrorKind.TYPE_MISMATCH,
        message=f"Expected {expected}, got {describe_type(raw)}",
        actual_value=raw,
    )


def _validate_primitive(
    node: PrimitiveNode, raw: Any, path: str, errors: List[FieldError]
) -> Any:
    accepted, value = _coerce(node.primitive, raw)
    if not accepted:
        if node.primitive == c.DATE and isinstance(raw, str):
            errors.append(
                FieldError(
                    path=path,
                    kind=FieldErrorKind.TYPE_MISMATCH,
                    message=f"Invalid date '{raw}': use ISO-8601 (e.g. 2024-01-15)",
                    actual_value=raw,
                )
            )
        else:
            errors.append(_type_mismatch(path, node.primitive, raw))
        return None

    # Every violated constraint is reported, not only the first
    for constraint in node.constraints:
        if not constraint.check(value):
            errors.append(
                FieldError(
                    path=path,
                    kind=FieldErrorKind.CONSTRAINT_VIOLATION,
                    message=f"Value {constraint.describe()}",
                    constraint=constraint.name,
                    actual_value=raw,
                )
            )
    return value


def _coerce(primitive: str, raw: Any) -> Tuple[bool, Any]:
    """Return (accepted, typed_value) for a raw scalar."""
    if primitive == c.STRING:
        return isinstance(raw, str), raw
    if primitive == c.NUMBER:
        return isinstance(raw, (int, float)) and not isinstance(raw, bool), raw
    if primitive == c.BOOLEAN:
        return isinstance(raw, bool), raw
    if primitive == c.DATE:
        parsed = parse_date(raw)
        return parsed is not None, parsed
    return False, None


def parse_date(raw: Any) -> Optional[date]:
    """
    Parse a date value the way content files write them.

    Accepts date/datetime objects (YAML loaders produce these for
    unquoted dates) and ISO-8601 strings. Date-only strings give a
    ``date``; strings with a time part give a ``datetime``.

    Examples:
        >>> parse_date("2024-01-05")
        datetime.date(2024, 1, 5)
        >>> parse_date("05/01/2024") is None
        True
    """
    if isinstance(raw, (date, datetime)):
        return raw
    if not isinstance(raw, str):
        return None

    text = raw
    # Surrounding whitespace is rejected, not stripped
    if not text or text != text.strip():
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def _validate_enum(node: EnumNode, raw: Any, path: str, errors: List[FieldError]) -> Any:
    if not isinstance(raw, str):
        errors.append(_type_mismatch(path, "string", raw))
        return None
    if raw in node:
        return raw
    errors.append(
        FieldError(
            path=path,
            kind=FieldErrorKind.INVALID_ENUM_VALUE,
            message=f"Invalid value {raw!r}; allowed: {', '.join(node.values)}",
            actual_value=raw,
        )
    )
    return None


def _validate_object(
    node: ObjectNode, raw: Any, path: str, errors: List[FieldError]
) -> Any:
    if not isinstance(raw, Mapping):
        errors.append(_type_mismatch(path, "object", raw))
        return None

    output: Dict[str, Any] = {}
    # Undeclared keys are ignored
    for spec in node.entries():
        field_path = join_field(path, spec.name)
        candidate = raw.get(spec.name)
        if candidate is not None:
            output[spec.name] = _validate_node(spec.node, candidate, field_path, errors)
        elif spec.required:
            errors.append(
                FieldError(
                    path=field_path,
                    kind=FieldErrorKind.MISSING_REQUIRED_FIELD,
                    message=f"Missing required field '{spec.name}'",
                )
            )
        elif spec.node.has_default:
            output[spec.name] = spec.default
    return MappingProxyType(output)


def _validate_array(
    node: ArrayNode, raw: Any, path: str, errors: List[FieldError]
) -> Any:
    if node.element is None:
        raise SchemaDefinitionError(f"Array at '{path or '<root>'}' has no element schema")
    if not isinstance(raw, (list, tuple)):
        errors.append(_type_mismatch(path, "array", raw))
        return None

    return tuple(
        _validate_node(node.element, item, join_index(path, index), errors)
        for index, item in enumerate(raw)
    )


# ----- Batches -----

@dataclass
class DocumentResult:
    """Validation outcome for one named document."""

    document: str
    result: ValidationResult

    @property
    def ok(self) -> bool:
        return self.result.ok

    @property
    def errors(self) -> Tuple[FieldError, ...]:
        return self.result.errors


@dataclass
class ValidationReport:
    """Per-document results of a batch run."""

    documents_checked: int = 0
    documents_with_errors: int = 0
    total_errors: int = 0
    results: List[DocumentResult] = field(default_factory=list)
    unreadable: List[Tuple[str, str]] = field(default_factory=list)

    def add(self, document: str, result: ValidationResult) -> None:
        self.results.append(DocumentResult(document, result))
        self.documents_checked += 1
        if not result.ok:
            self.documents_with_errors += 1
            self.total_errors += len(result.errors)

    def add_unreadable(self, document: str, reason: str) -> None:
        """Record a document the loader could not turn into a raw record."""
        self.unreadable.append((document, reason))

    def merge(self, other: "ValidationReport") -> None:
        for entry in other.results:
            self.add(entry.document, entry.result)
        self.unreadable.extend(other.unreadable)

    def failed(self) -> List[DocumentResult]:
        return [entry for entry in self.results if not entry.ok]

    def records(self) -> Dict[str, Any]:
        """Validated records of the documents that passed, by document name."""
        return {entry.document: entry.result.value for entry in self.results if entry.ok}

    @property
    def has_errors(self) -> bool:
        return self.documents_with_errors > 0 or bool(self.unreadable)

    @property
    def is_healthy(self) -> bool:
        return not self.has_errors


def validate_batch(
    node: SchemaNode,
    documents: Iterable[Tuple[str, Any]],
    folio_logger: Optional[FolioLogger] = None,
) -> ValidationReport:
    """
    Validate many documents against one schema.

    A failing document never stops the batch; whether a failure is fatal
    is up to the caller inspecting the report.

    Args:
        node: Root schema shared by all documents
        documents: (document name, raw record) pairs
        folio_logger: Optional FolioLogger receiving per-document field errors
    """
    report = ValidationReport()
    for name, raw in documents:
        result = validate(node, raw)
        report.add(name, result)
        if not result.ok:
            safe_logger(folio_logger).log_field_errors(name, result.errors)
    logger.debug(
        "Validated %d document(s), %d with errors",
        report.documents_checked,
        report.documents_with_errors,
    )
    return report
