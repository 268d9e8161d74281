#!/usr/bin/env python3
"""
builders.py
-----------
Constructors for schema nodes, plus whole-tree consistency checks.

Import the module under a short alias and build schemas declaratively:

    from folio.schema import builders as s

    post = s.obj({
        "title": s.string().non_empty(),
        "date": s.date(),
        "tags": s.array(s.string()).optional(),
        "status": s.enum("draft", "published").with_default("draft"),
    })

Every constructor validates its arguments immediately and raises
SchemaDefinitionError, so a broken schema never reaches validation.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from typing import Iterable, List, Union

# --- Local imports ---
from folio.core.exceptions import SchemaDefinitionError
from folio.schema import constraints as c
from folio.schema.nodes import (
    ArrayNode,
    EnumNode,
    FieldsInput,
    ObjectNode,
    PrimitiveNode,
    SchemaNode,
    normalize_fields,
)


def string() -> PrimitiveNode:
    return PrimitiveNode(primitive=c.STRING)


def number() -> PrimitiveNode:
    return PrimitiveNode(primitive=c.NUMBER)


def boolean() -> PrimitiveNode:
    return PrimitiveNode(primitive=c.BOOLEAN)


def date() -> PrimitiveNode:
    """Date value; accepts date objects and ISO-8601 strings."""
    return PrimitiveNode(primitive=c.DATE)


def enum(*values: Union[str, Iterable[str]]) -> EnumNode:
    """
    Enumeration of allowed strings, in declaration order.

    Accepts either separate arguments or a single iterable:
        enum("xs", "sm", "md")
        enum(["xs", "sm", "md"])

    Raises:
        SchemaDefinitionError: If the set is empty, has duplicates
            or contains non-strings
    """
    if len(values) == 1 and not isinstance(values[0], str):
        allowed = tuple(values[0])
    else:
        allowed = tuple(values)

    if not allowed:
        raise SchemaDefinitionError("Enum schema needs at least one allowed value")
    for value in allowed:
        if not isinstance(value, str):
            raise SchemaDefinitionError(
                f"Enum values must be strings, got {type(value).__name__} ({value!r})"
            )
    duplicates = sorted({v for v in allowed if allowed.count(v) > 1})
    if duplicates:
        raise SchemaDefinitionError(
            f"Duplicate enum value(s): {', '.join(repr(v) for v in duplicates)}"
        )
    return EnumNode(values=allowed)


def obj(fields: FieldsInput = ()) -> ObjectNode:
    """
    Object schema from a mapping or ordered (name, node) pairs.

    A field is required unless its node was made optional() or given a
    default.

    Raises:
        SchemaDefinitionError: On duplicate field names or non-node values
    """
    return ObjectNode(fields=normalize_fields(fields))


def array(element: SchemaNode) -> ArrayNode:
    if not isinstance(element, SchemaNode):
        raise SchemaDefinitionError(
            f"Array element must be a schema node, got {type(element).__name__}"
        )
    return ArrayNode(element=element)


def check_schema(node: SchemaNode, path: str = "") -> SchemaNode:
    """
    Walk a schema tree and verify its internal consistency.

    Nodes built through this module are already consistent; the walk
    catches trees assembled by hand with the node classes.

    Args:
        node: Root of the tree to check
        path: Path prefix used in error messages

    Returns:
        The node itself, for chaining

    Raises:
        SchemaDefinitionError: Listing every problem found in the tree
    """
    problems: List[str] = []
    _check_node(node, path or "<root>", problems)
    if problems:
        raise SchemaDefinitionError(
            "Inconsistent schema: " + "; ".join(problems)
        )
    return node


def _check_node(node: object, path: str, problems: List[str]) -> None:
    if not isinstance(node, SchemaNode):
        problems.append(f"{path}: expected a schema node, got {type(node).__name__}")
        return

    if isinstance(node, EnumNode):
        if not node.values:
            problems.append(f"{path}: enum has no allowed values")
        elif len(set(node.values)) != len(node.values):
            problems.append(f"{path}: enum has duplicate values")

    elif isinstance(node, ArrayNode):
        if node.element is None:
            problems.append(f"{path}: array has no element schema")
        else:
            _check_node(node.element, f"{path}[]", problems)

    elif isinstance(node, ObjectNode):
        seen = set()
        for name, child in node.fields:
            if name in seen:
                problems.append(f"{path}: duplicate field '{name}'")
            seen.add(name)
            child_path = name if path == "<root>" else f"{path}.{name}"
            _check_node(child, child_path, problems)

    elif isinstance(node, PrimitiveNode):
        for constraint in node.constraints:
            if node.primitive not in constraint.applies_to:
                problems.append(
                    f"{path}: constraint '{constraint.name}' does not apply to {node.primitive}"
                )
