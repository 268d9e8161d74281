#!/usr/bin/env python3
"""
export.py
---------
Render schema nodes as JSON Schema (draft 2020-12 vocabulary).

Used by the CLI ``schema`` command and by content editors that build
forms from a collection's schema. Editor hints and other node metadata
are emitted under the ``$content`` annotation key, which JSON Schema
validators ignore; descriptions map to the standard ``description``.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from datetime import date
from typing import Any, Dict, List

# --- Local imports ---
from folio.schema import constraints as c
from folio.schema.nodes import ArrayNode, EnumNode, ObjectNode, PrimitiveNode, SchemaNode
from folio.utils.frozen import thaw

JSON_SCHEMA_DIALECT = "https://json-schema.org/draft/2020-12/schema"

# Constraint name -> JSON Schema keyword, for constraints with one parameter
_PARAM_KEYWORDS = {
    "minLength": ("minLength", "min"),
    "maxLength": ("maxLength", "max"),
    "min": ("minimum", "min"),
    "max": ("maximum", "max"),
    "matches": ("pattern", "pattern"),
}


def to_json_schema(node: SchemaNode, root: bool = True) -> Dict[str, Any]:
    """
    Convert a schema node to a JSON Schema dictionary.

    Args:
        node: Schema node to render
        root: Whether to add the ``$schema`` dialect key

    Returns:
        JSON-serialisable dictionary
    """
    rendered = _render(node)
    if root:
        rendered = {"$schema": JSON_SCHEMA_DIALECT, **rendered}
    return rendered


def _render(node: SchemaNode) -> Dict[str, Any]:
    if isinstance(node, PrimitiveNode):
        schema = _render_primitive(node)
    elif isinstance(node, EnumNode):
        schema = {"type": "string", "enum": list(node.values)}
    elif isinstance(node, ObjectNode):
        schema = _render_object(node)
    elif isinstance(node, ArrayNode):
        schema = {"type": "array"}
        if node.element is not None:
            schema["items"] = _render(node.element)
    else:
        schema = {}

    if node.has_default:
        schema["default"] = _json_value(thaw(node.default))

    metadata = thaw(node.metadata)
    description = metadata.pop("description", None)
    if description:
        schema["description"] = description
    if metadata:
        schema["$content"] = metadata
    return schema


def _render_primitive(node: PrimitiveNode) -> Dict[str, Any]:
    if node.primitive == c.DATE:
        schema: Dict[str, Any] = {"type": "string", "format": "date"}
    else:
        schema = {"type": node.primitive}

    for constraint in node.constraints:
        if constraint.name == "nonEmpty":
            schema["minLength"] = max(schema.get("minLength", 0), 1)
        elif constraint.name == "positive":
            schema["exclusiveMinimum"] = 0
        elif constraint.name == "nonnegative":
            schema["minimum"] = max(schema.get("minimum", 0), 0)
        elif constraint.name == "integer":
            schema["type"] = "integer"
        elif constraint.name == "isUrl":
            schema["format"] = "uri"
        elif constraint.name == "isEmail":
            schema["format"] = "email"
        elif constraint.name == "length":
            schema["minLength"] = schema["maxLength"] = constraint.param("length")
        elif constraint.name in _PARAM_KEYWORDS:
            keyword, param = _PARAM_KEYWORDS[constraint.name]
            schema[keyword] = constraint.param(param)
    return schema


def _render_object(node: ObjectNode) -> Dict[str, Any]:
    properties: Dict[str, Any] = {}
    required: List[str] = []
    for spec in node.entries():
        properties[spec.name] = _render(spec.node)
        if spec.required:
            required.append(spec.name)

    schema: Dict[str, Any] = {"type": "object", "properties": properties}
    if required:
        schema["required"] = required
    return schema


def _json_value(value: Any) -> Any:
    """Dates in defaults are written the way content files write them."""
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, dict):
        return {key: _json_value(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_json_value(item) for item in value]
    return value
