"""
Collection registry package for Folio.

- descriptor: CollectionKind, SourcePattern, CollectionDescriptor
- registry: CollectionRegistry (register, resolve, validate)
- site: the site's collection table and build_site_registry()
"""

from .descriptor import CollectionDescriptor, CollectionKind, SourcePattern, define_collection
from .registry import CollectionRegistry, page_fields

__all__ = [
    "CollectionDescriptor",
    "CollectionKind",
    "CollectionRegistry",
    "SourcePattern",
    "define_collection",
    "page_fields",
]
