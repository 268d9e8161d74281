#!/usr/bin/env python3
"""
registry.py
-----------
The collection registry: collection name -> descriptor + effective schema.

Lifecycle:
    1. Construct a CollectionRegistry and register() every descriptor
       (single-threaded, at start-up). Any inconsistency raises
       SchemaDefinitionError and initialization should stop.
    2. freeze() it. From then on the registry is read-only and can be
       shared by any number of concurrent validation calls.

The registry performs no file I/O. A loader hands it raw records and
gets back ValidationResults.

Usage:
    registry = CollectionRegistry()
    registry.register(define_collection("blog", "page", "blog/*.md", schema))
    registry.freeze()

    result = registry.validate("blog", raw_frontmatter)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

# --- Local imports ---
from folio.core.exceptions import SchemaDefinitionError, UnknownCollectionError
from folio.core.logging_manager import FolioLogger, safe_logger
from folio.registry.descriptor import CollectionDescriptor, CollectionKind
from folio.schema import builders as s
from folio.schema.builders import check_schema
from folio.schema.nodes import ObjectNode
from folio.validation.validator import ValidationReport, ValidationResult, validate, validate_batch


def page_fields() -> ObjectNode:
    """
    Fields every page document may carry in addition to its own schema.

    A collection that declares one of these names keeps its own
    definition.
    """
    return s.obj({
        "title": s.string().optional(),
        "description": s.string().optional(),
        "path": s.string().optional(),
        "body": s.string().optional(),
        "navigation": s.boolean().with_default(True),
    })


class CollectionRegistry:
    """
    Named collections and their effective root schemas.

    Attributes:
        logger: Optional FolioLogger for registration events
    """

    def __init__(self, logger: Optional[FolioLogger] = None) -> None:
        self.logger = logger
        self._descriptors: Dict[str, CollectionDescriptor] = {}
        self._schemas: Dict[str, ObjectNode] = {}
        self._frozen = False

    # ----- Construction -----

    def register(self, descriptor: CollectionDescriptor) -> CollectionDescriptor:
        """
        Add a collection.

        Raises:
            SchemaDefinitionError: If the registry is frozen, the name is
                taken, an include names an unregistered collection, or
                the root schema is inconsistent
        """
        if self._frozen:
            raise SchemaDefinitionError(
                f"Cannot register '{descriptor.name}': registry is frozen"
            )
        if not isinstance(descriptor, CollectionDescriptor):
            raise SchemaDefinitionError(
                f"Expected a CollectionDescriptor, got {type(descriptor).__name__}"
            )
        if descriptor.name in self._descriptors:
            raise SchemaDefinitionError(f"Duplicate collection name '{descriptor.name}'")

        for include in descriptor.includes:
            if include not in self._descriptors:
                raise SchemaDefinitionError(
                    f"Collection '{descriptor.name}' includes unregistered collection '{include}'"
                )

        try:
            check_schema(descriptor.schema, descriptor.name)
        except SchemaDefinitionError as e:
            raise SchemaDefinitionError(f"Collection '{descriptor.name}': {e}") from e

        self._descriptors[descriptor.name] = descriptor
        self._schemas[descriptor.name] = self._effective_schema(descriptor)

        safe_logger(self.logger).log_operation(
            "register_collection",
            {
                "name": descriptor.name,
                "kind": descriptor.kind.value,
                "sources": [str(source) for source in descriptor.sources],
                "fields": list(descriptor.schema.field_names),
            },
        )
        return descriptor

    def register_all(self, descriptors: Iterable[CollectionDescriptor]) -> "CollectionRegistry":
        for descriptor in descriptors:
            self.register(descriptor)
        return self

    def freeze(self) -> "CollectionRegistry":
        """End the construction phase; the registry is read-only afterwards."""
        self._frozen = True
        safe_logger(self.logger).log_info(
            "Collection registry frozen", {"collections": self.names()}
        )
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    @staticmethod
    def _effective_schema(descriptor: CollectionDescriptor) -> ObjectNode:
        if descriptor.kind is not CollectionKind.PAGE:
            return descriptor.schema
        declared = set(descriptor.schema.field_names)
        implicit = [(name, node) for name, node in page_fields().fields if name not in declared]
        return descriptor.schema.extend(implicit)

    # ----- Lookup -----

    def resolve(self, name: str) -> CollectionDescriptor:
        """
        Look up a descriptor by name.

        Raises:
            UnknownCollectionError: If no collection has that name
        """
        try:
            return self._descriptors[name]
        except KeyError:
            raise UnknownCollectionError(name) from None

    def schema_for(self, name: str) -> ObjectNode:
        """Root schema documents are validated against (page fields included)."""
        self.resolve(name)
        return self._schemas[name]

    def names(self) -> List[str]:
        return list(self._descriptors)

    def __contains__(self, name: object) -> bool:
        return name in self._descriptors

    def __iter__(self) -> Iterator[CollectionDescriptor]:
        return iter(self._descriptors.values())

    def __len__(self) -> int:
        return len(self._descriptors)

    def expand_sources(self, name: str) -> Tuple[str, ...]:
        """
        Flatten a collection's sources into glob patterns.

        Includes are replaced, in place, by the patterns of the included
        collection; repeated patterns keep their first position.

        Examples:
            >>> registry.expand_sources("pages")
            ('projects/*.yml', 'blog/*.md', 'projects.yml', 'blog.yml')
        """
        return tuple(pattern for _, pattern in self.resolve_sources(name))

    def resolve_sources(self, name: str) -> Tuple[Tuple[str, str], ...]:
        """
        Like expand_sources(), paired with the collection that declares
        each pattern.

        Documents matched through an include belong to the included
        collection and are validated against its schema.

        Examples:
            >>> registry.resolve_sources("pages")
            (('projects', 'projects/*.yml'), ('blog', 'blog/*.md'), ('pages', 'projects.yml'), ...)
        """
        resolved: List[Tuple[str, str]] = []
        seen = set()
        for source in self.resolve(name).sources:
            if source.is_include:
                expanded = self.resolve_sources(source.include)
            else:
                expanded = ((name, source.pattern),)
            for owner, pattern in expanded:
                if pattern not in seen:
                    seen.add(pattern)
                    resolved.append((owner, pattern))
        return tuple(resolved)

    # ----- Validation -----

    def validate(self, name: str, raw: Any) -> ValidationResult:
        """
        Validate one raw document of a collection.

        Raises:
            UnknownCollectionError: If the collection is not registered
        """
        return validate(self.schema_for(name), raw)

    def validate_batch(
        self,
        name: str,
        documents: Iterable[Tuple[str, Any]],
        logger: Optional[FolioLogger] = None,
    ) -> ValidationReport:
        """Validate (document name, raw record) pairs of one collection."""
        report = validate_batch(self.schema_for(name), documents, logger or self.logger)
        safe_logger(logger or self.logger).log_operation(
            "validate_collection",
            {
                "collection": name,
                "documents": report.documents_checked,
                "invalid": report.documents_with_errors,
                "errors": report.total_errors,
            },
        )
        return report
