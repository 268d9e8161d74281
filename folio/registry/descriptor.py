#!/usr/bin/env python3
"""
descriptor.py
-------------
Collection descriptors: what a collection is called, where its documents
come from and which schema they must satisfy.

Descriptors are plain immutable values; the registry checks how they
relate to each other (unique names, includes of known collections).
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, List, Mapping, Optional, Tuple, Union

# --- Local imports ---
from folio.core.exceptions import SchemaDefinitionError
from folio.schema.nodes import ObjectNode


class CollectionKind(str, Enum):
    """
    Enumeration of collection kinds.

    - PAGE: Markdown body plus frontmatter (or a YAML page definition)
    - DATA: Structured YAML/JSON records without a body
    """

    PAGE = "page"
    DATA = "data"

    @classmethod
    def choices(cls) -> List[str]:
        return [kind.value for kind in cls]


@dataclass(frozen=True)
class SourcePattern:
    """
    One document selector of a collection.

    Exactly one of ``pattern`` (a glob relative to the content root) or
    ``include`` (the name of another collection whose sources are reused)
    is set.
    """

    pattern: Optional[str] = None
    include: Optional[str] = None

    def __post_init__(self) -> None:
        if (self.pattern is None) == (self.include is None):
            raise SchemaDefinitionError(
                "A source must define exactly one of a glob pattern or an include"
            )
        value = self.pattern if self.pattern is not None else self.include
        if not isinstance(value, str) or not value.strip():
            raise SchemaDefinitionError(f"Source values must be non-empty strings, got {value!r}")

    @classmethod
    def glob(cls, pattern: str) -> "SourcePattern":
        return cls(pattern=pattern)

    @classmethod
    def including(cls, collection: str) -> "SourcePattern":
        return cls(include=collection)

    @classmethod
    def coerce(cls, value: Union[str, Mapping[str, Any], "SourcePattern"]) -> "SourcePattern":
        """
        Accept the shorthand forms used in collection tables.

        Examples:
            >>> SourcePattern.coerce("projects/*.yml")
            SourcePattern(pattern='projects/*.yml', include=None)
            >>> SourcePattern.coerce({"include": "blog"})
            SourcePattern(pattern=None, include='blog')
        """
        if isinstance(value, SourcePattern):
            return value
        if isinstance(value, str):
            return cls.glob(value)
        if isinstance(value, Mapping):
            unknown = set(value) - {"pattern", "include"}
            if unknown:
                raise SchemaDefinitionError(
                    f"Unknown source key(s): {', '.join(sorted(unknown))}"
                )
            return cls(pattern=value.get("pattern"), include=value.get("include"))
        raise SchemaDefinitionError(f"Cannot interpret {value!r} as a collection source")

    @property
    def is_include(self) -> bool:
        return self.include is not None

    def __str__(self) -> str:
        return f"include:{self.include}" if self.is_include else str(self.pattern)


SourcesInput = Union[str, Mapping[str, Any], SourcePattern, Iterable[Any]]


def normalize_sources(sources: SourcesInput) -> Tuple[SourcePattern, ...]:
    if isinstance(sources, (str, Mapping, SourcePattern)):
        sources = [sources]
    normalized = tuple(SourcePattern.coerce(source) for source in sources)
    if not normalized:
        raise SchemaDefinitionError("A collection needs at least one source")
    return normalized


@dataclass(frozen=True)
class CollectionDescriptor:
    """
    Read-only description of a content collection.

    Attributes:
        name: Unique collection name
        kind: CollectionKind.PAGE or CollectionKind.DATA
        sources: Ordered document selectors
        schema: Root object schema of every document
    """

    name: str
    kind: CollectionKind
    sources: Tuple[SourcePattern, ...]
    schema: ObjectNode

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise SchemaDefinitionError(f"Collection name must be a non-empty string, got {self.name!r}")
        try:
            kind = CollectionKind(self.kind)
        except ValueError:
            raise SchemaDefinitionError(
                f"Invalid kind {self.kind!r} for collection '{self.name}'. "
                f"Valid kinds: {', '.join(CollectionKind.choices())}"
            ) from None
        if not isinstance(self.schema, ObjectNode):
            raise SchemaDefinitionError(
                f"Collection '{self.name}' needs an object schema at its root, "
                f"got {type(self.schema).__name__}"
            )
        # Frozen dataclass: normalise through object.__setattr__
        object.__setattr__(self, "kind", kind)
        object.__setattr__(self, "sources", normalize_sources(self.sources))

    @property
    def includes(self) -> Tuple[str, ...]:
        return tuple(source.include for source in self.sources if source.is_include)


def define_collection(
    name: str,
    kind: Union[str, CollectionKind],
    source: SourcesInput,
    schema: ObjectNode,
) -> CollectionDescriptor:
    """Keyword-friendly constructor mirroring a collection table entry."""
    return CollectionDescriptor(name=name, kind=kind, sources=source, schema=schema)  # type: ignore[arg-type]
