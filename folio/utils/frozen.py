#!/usr/bin/env python3
"""
frozen.py
---------
Read-only views of nested mapping/sequence trees.

Schema metadata, defaults and validated records are shared between
callers, so they are stored as MappingProxyType/tuple trees. ``thaw``
turns such a tree back into plain dicts and lists for serialisation.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from types import MappingProxyType
from typing import Any, Mapping


def freeze(value: Any) -> Any:
    """
    Recursively convert mappings to MappingProxyType and lists to tuples.

    Examples:
        >>> frozen = freeze({"editor": {"input": "media"}})
        >>> frozen["editor"]["input"]
        'media'
    """
    if isinstance(value, Mapping):
        return MappingProxyType({key: freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze(item) for item in value)
    if isinstance(value, (set, frozenset)):
        return frozenset(freeze(item) for item in value)
    return value


def thaw(value: Any) -> Any:
    """Inverse of freeze: plain dicts and lists, ready for json/yaml dumping."""
    if isinstance(value, Mapping):
        return {key: thaw(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [thaw(item) for item in value]
    if isinstance(value, frozenset):
        return sorted(thaw(item) for item in value)
    return value
