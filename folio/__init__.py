"""
Folio
=====

Schema definition and validation for static-site content collections.

Each collection (home page, projects, blog posts, products, ...) declares
the shape of its documents with a small schema type system: primitives,
enumerations, objects and arrays, refined with constraints and defaults
and annotated with editor hints. A loader hands raw records parsed from
YAML or Markdown frontmatter to the registry and gets back typed records
or the complete list of field errors.

Main Components:
    - schema: nodes, builders, constraints, reusable fragments, JSON Schema export
    - validation: recursive validator, field errors, batch reports
    - registry: collection descriptors, registry, the site collection table
    - loader: file discovery and YAML/frontmatter parsing (adapter)
    - core: exceptions, logging, paths, CLI helpers

Example Usage:
    >>> from folio.registry.site import build_site_registry
    >>> registry = build_site_registry()
    >>> result = registry.validate("projects", {"title": "Folio", ...})
    >>> result.ok
"""

__version__ = "1.0.0"

from folio.core.exceptions import (
    DocumentParseError,
    DocumentValidationError,
    SchemaDefinitionError,
    UnknownCollectionError,
)
from folio.registry import CollectionDescriptor, CollectionKind, CollectionRegistry, SourcePattern
from folio.validation import FieldError, FieldErrorKind, ValidationResult, validate

__all__ = [
    "CollectionDescriptor",
    "CollectionKind",
    "CollectionRegistry",
    "DocumentParseError",
    "DocumentValidationError",
    "FieldError",
    "FieldErrorKind",
    "SchemaDefinitionError",
    "SourcePattern",
    "UnknownCollectionError",
    "ValidationResult",
    "validate",
]
