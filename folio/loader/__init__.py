"""
Loader adapter for Folio.

Reads content files (YAML data files, Markdown with frontmatter) and
feeds them to the collection registry. Not part of the validation
engine; the engine never performs I/O.
"""

from .documents import ContentLoader, RawDocument, parse_document, split_frontmatter

__all__ = ["ContentLoader", "RawDocument", "parse_document", "split_frontmatter"]
