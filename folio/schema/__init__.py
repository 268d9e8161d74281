"""
Schema package for Folio.

A small type system for content documents:
- constraints: named predicates refining primitive values
- nodes: immutable schema nodes and fluent combinators
- builders: constructors (string, number, boolean, date, enum, obj, array)
- fragments: reusable sub-schemas (button, image, author, testimonial)
- export: JSON Schema rendering with editor hints

Usage:
    from folio.schema import builders as s

    schema = s.obj({"title": s.string().non_empty(), "date": s.date()})
"""

from .constraints import Constraint
from .nodes import (
    MISSING,
    ArrayNode,
    EnumNode,
    FieldSpec,
    ObjectNode,
    PrimitiveNode,
    SchemaNode,
)
from .builders import array, boolean, check_schema, date, enum, number, obj, string

__all__ = [
    "MISSING",
    "ArrayNode",
    "Constraint",
    "EnumNode",
    "FieldSpec",
    "ObjectNode",
    "PrimitiveNode",
    "SchemaNode",
    "array",
    "boolean",
    "check_schema",
    "date",
    "enum",
    "number",
    "obj",
    "string",
]
