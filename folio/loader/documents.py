#!/usr/bin/env python3
"""
documents.py
------------
Loader adapter: turns content files into raw records for the registry.

This module is the file-facing collaborator of the validation engine.
It discovers files with the registry's expanded glob patterns, parses
YAML data files and Markdown frontmatter with PyYAML, and hands the
untyped records to CollectionRegistry.validate_batch(). The engine
itself never imports it.

Usage:
    from folio.loader.documents import ContentLoader
    from folio.registry.site import build_site_registry

    loader = ContentLoader(build_site_registry(), Path("content"))
    report = loader.load("blog")
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

# --- Third party imports ---
import yaml

# --- Local imports ---
from folio.core.exceptions import DocumentParseError
from folio.core.logging_manager import FolioLogger, safe_logger
from folio.registry.descriptor import CollectionKind
from folio.registry.registry import CollectionRegistry
from folio.validation.errors import FieldError, FieldErrorKind
from folio.validation.validator import ValidationReport, ValidationResult

YAML_SUFFIXES = (".yml", ".yaml")
MARKDOWN_SUFFIXES = (".md", ".markdown")


@dataclass
class RawDocument:
    """A parsed but unvalidated content file."""

    path: Path
    data: Dict[str, Any] = field(default_factory=dict)
    body: Optional[str] = None


def split_frontmatter(content: str) -> Tuple[str, str]:
    """
    Split Markdown content into YAML frontmatter and body.

    Expected format:
        ---
        yaml: content
        ---

        Body content here...

    Returns:
        Tuple of (frontmatter_text, body_text); frontmatter_text is empty
        when the file has no frontmatter block

    Examples:
        >>> split_frontmatter("---\\ntitle: Hi\\n---\\n\\nBody text")
        ('title: Hi', 'Body text')
    """
    lines = content.splitlines()
    if not lines or lines[0].strip() != "---":
        return "", content

    closing = None
    for index, line in enumerate(lines[1:], 1):
        if line.strip() == "---":
            closing = index
            break
    if closing is None:
        return "", content

    body_lines = lines[closing + 1 :]
    while body_lines and not body_lines[0].strip():
        body_lines.pop(0)
    return "\n".join(lines[1:closing]), "\n".join(body_lines)


def _load_yaml(text: str, path: Path) -> Dict[str, Any]:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise DocumentParseError(f"Invalid YAML in {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise DocumentParseError(
            f"Expected a mapping at the top of {path}, got {type(data).__name__}"
        )
    return data


def parse_document(path: Path, kind: CollectionKind = CollectionKind.DATA) -> RawDocument:
    """
    Read one content file into a RawDocument.

    YAML files are parsed whole. Markdown files contribute their
    frontmatter as data; for page collections the body is also exposed
    under the ``body`` key unless the frontmatter sets one.

    Raises:
        DocumentParseError: On unreadable files, bad YAML or unknown suffixes
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise DocumentParseError(f"Cannot read {path}: {e}") from e

    suffix = path.suffix.lower()
    if suffix in YAML_SUFFIXES:
        return RawDocument(path=path, data=_load_yaml(text, path))

    if suffix in MARKDOWN_SUFFIXES:
        frontmatter, body = split_frontmatter(text)
        data = _load_yaml(frontmatter, path) if frontmatter else {}
        if CollectionKind(kind) is CollectionKind.PAGE and body:
            data.setdefault("body", body)
        return RawDocument(path=path, data=data, body=body)

    raise DocumentParseError(
        f"Unsupported content file {path}; expected one of "
        f"{', '.join(YAML_SUFFIXES + MARKDOWN_SUFFIXES)}"
    )


class ContentLoader:
    """
    Discover, parse and validate the documents of registered collections.

    Attributes:
        registry: Frozen collection registry
        content_dir: Root the collection glob patterns are relative to
        logger: Optional FolioLogger
    """

    def __init__(
        self,
        registry: CollectionRegistry,
        content_dir: Path,
        logger: Optional[FolioLogger] = None,
    ) -> None:
        self.registry = registry
        self.content_dir = Path(content_dir)
        self.logger = logger

    def discover(self, name: str) -> List[Path]:
        """Files matching a collection's expanded sources, in pattern order."""
        return [path for _, path in self._discover_owned(name)]

    def _discover_owned(self, name: str) -> List[Tuple[str, Path]]:
        """(owning collection, file) pairs; included files belong to their own collection."""
        found: List[Tuple[str, Path]] = []
        seen = set()
        for owner, pattern in self.registry.resolve_sources(name):
            for path in sorted(self.content_dir.glob(pattern)):
                if path.is_file() and path not in seen:
                    seen.add(path)
                    found.append((owner, path))
        return found

    def _relative(self, path: Path) -> str:
        try:
            return path.relative_to(self.content_dir).as_posix()
        except ValueError:
            return path.as_posix()

    def load(self, name: str) -> ValidationReport:
        """
        Validate every document of one collection.

        Files reached through an include are validated against the schema
        of the collection that declares them. Unparseable files are
        recorded as unreadable and do not stop the run. When nothing at
        all resolves for an aggregating collection, each of its includes
        is reported as an UnresolvableInclude error.

        Raises:
            UnknownCollectionError: If the collection is not registered
        """
        descriptor = self.registry.resolve(name)
        log = safe_logger(self.logger)
        log.log_operation("load_collection", {"collection": name, "content_dir": self.content_dir})

        report = ValidationReport()
        batches: Dict[str, List[Tuple[str, Any]]] = {}
        for owner, path in self._discover_owned(name):
            relative = self._relative(path)
            try:
                document = parse_document(path, self.registry.resolve(owner).kind)
            except DocumentParseError as e:
                report.add_unreadable(relative, str(e))
                log.log_warning("Unreadable document", {"document": relative, "reason": str(e)})
                continue
            batches.setdefault(owner, []).append((relative, document.data))

        for owner, documents in batches.items():
            report.merge(self.registry.validate_batch(owner, documents, self.logger))

        if descriptor.includes and not report.results and not report.unreadable:
            for include in descriptor.includes:
                patterns = ", ".join(self.registry.expand_sources(include))
                error = FieldError(
                    path="",
                    kind=FieldErrorKind.UNRESOLVABLE_INCLUDE,
                    message=f"Included collection '{include}' matched no files ({patterns})",
                    actual_value=include,
                )
                report.add(f"include:{include}", ValidationResult(errors=(error,)))
                log.log_field_errors(f"include:{include}", [error])
        return report

    def load_all(self) -> Dict[str, ValidationReport]:
        """Validate every registered collection; one report per collection."""
        return {descriptor.name: self.load(descriptor.name) for descriptor in self.registry}
