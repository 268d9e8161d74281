import datetime
from unittest.mock import MagicMock

import pytest

from folio.core.exceptions import DocumentParseError, UnknownCollectionError
from folio.core.logging_manager import FolioLogger
from folio.loader import ContentLoader, parse_document, split_frontmatter
from folio.registry import CollectionKind, CollectionRegistry, define_collection
from folio.schema import builders as s
from folio.validation import FieldErrorKind


class TestSplitFrontmatter:
    """Frontmatter extraction from Markdown text."""

    def test_frontmatter_and_body(self):
        fm, body = split_frontmatter("---\ntitle: Hi\ndate: 2024-01-05\n---\n\n# Heading\n\nText")
        assert fm == "title: Hi\ndate: 2024-01-05"
        assert body == "# Heading\n\nText"

    def test_no_frontmatter(self):
        assert split_frontmatter("# Just a body") == ("", "# Just a body")

    def test_unclosed_frontmatter(self):
        content = "---\ntitle: Hi\n\nno closing fence"
        assert split_frontmatter(content) == ("", content)

    def test_empty_content(self):
        assert split_frontmatter("") == ("", "")


class TestParseDocument:
    def test_yaml_file(self, tmp_path, yaml_writer):
        path = tmp_path / "projects" / "a.yml"
        yaml_writer(path, {"title": "A", "date": "2024-01-05"})
        assert parse_document(path).data == {"title": "A", "date": "2024-01-05"}

    def test_yaml_dates_are_parsed_by_yaml(self, tmp_path):
        path = tmp_path / "event.yaml"
        path.write_text("date: 2024-01-05\n", encoding="utf-8")
        assert parse_document(path).data["date"] == datetime.date(2024, 1, 5)

    def test_markdown_page_exposes_body(self, tmp_path, markdown_writer):
        path = tmp_path / "post.md"
        markdown_writer(path, {"title": "Hi"}, "Hello there.")
        document = parse_document(path, CollectionKind.PAGE)
        assert document.data == {"title": "Hi", "body": "Hello there."}
        assert document.body == "Hello there."

    def test_markdown_data_has_no_body_key(self, tmp_path, markdown_writer):
        path = tmp_path / "post.md"
        markdown_writer(path, {"title": "Hi"})
        assert "body" not in parse_document(path, CollectionKind.DATA).data

    def test_frontmatter_body_wins(self, tmp_path, markdown_writer):
        path = tmp_path / "post.md"
        markdown_writer(path, {"body": "Summary"}, "Full text")
        assert parse_document(path, "page").data["body"] == "Summary"

    def test_empty_yaml_is_empty_record(self, tmp_path):
        path = tmp_path / "empty.yml"
        path.write_text("", encoding="utf-8")
        assert parse_document(path).data == {}

    @pytest.mark.parametrize(
        "name, content, message",
        [
            ("bad.yml", "title: [unclosed\n", "Invalid YAML"),
            ("list.yml", "- a\n- b\n", "Expected a mapping"),
            ("notes.txt", "title: Hi\n", "Unsupported content file"),
        ],
    )
    def test_parse_errors(self, tmp_path, name, content, message):
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        with pytest.raises(DocumentParseError, match=message):
            parse_document(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(DocumentParseError, match="Cannot read"):
            parse_document(tmp_path / "missing.yml")


class TestContentLoader:
    """Discovery and batch validation over a content directory."""

    def test_discover(self, site_registry, content_dir, yaml_writer, project_record):
        yaml_writer(content_dir / "projects" / "alpha.yml", project_record)
        loader = ContentLoader(site_registry, content_dir)
        assert [p.name for p in loader.discover("projects")] == ["alpha.yml", "folio.yml"]

    @pytest.mark.parametrize("name", ["projects", "blog", "products"])
    def test_valid_collections(self, site_registry, content_dir, name):
        report = ContentLoader(site_registry, content_dir).load(name)
        assert report.is_healthy
        assert report.documents_checked == 1

    def test_records_keyed_by_relative_path(self, site_registry, content_dir):
        records = ContentLoader(site_registry, content_dir).load("blog").records()
        record = records["blog/schemas.md"]
        assert record["body"].startswith("# Schemas")
        assert record["navigation"] is True

    def test_collection_without_files_is_empty(self, site_registry, content_dir):
        report = ContentLoader(site_registry, content_dir).load("speaking")
        assert report.documents_checked == 0
        assert report.is_healthy

    def test_invalid_document_reported(self, site_registry, content_dir, markdown_writer, product_record):
        product_record["price"] = -5
        markdown_writer(content_dir / "products" / "cheap.md", product_record)
        report = ContentLoader(site_registry, content_dir).load("products")
        assert report.documents_checked == 2
        [failed] = report.failed()
        assert failed.document == "products/cheap.md"
        assert [(e.path, e.constraint) for e in failed.errors] == [("price", "positive")]

    def test_unreadable_document_does_not_stop_run(self, site_registry, content_dir):
        (content_dir / "projects" / "broken.yml").write_text("title: [oops\n", encoding="utf-8")
        logger = MagicMock(spec=FolioLogger)
        report = ContentLoader(site_registry, content_dir, logger).load("projects")
        assert report.documents_checked == 1
        assert [doc for doc, _ in report.unreadable] == ["projects/broken.yml"]
        assert report.has_errors
        logger.log_warning.assert_called_once()

    def test_unknown_collection(self, site_registry, content_dir):
        with pytest.raises(UnknownCollectionError):
            ContentLoader(site_registry, content_dir).load("newsletters")

    def test_load_all(self, site_registry, content_dir):
        reports = ContentLoader(site_registry, content_dir).load_all()
        assert list(reports) == site_registry.names()


class TestIncludes:
    """Aggregating collections."""

    @pytest.fixture
    def registry(self):
        schema = s.obj({"title": s.string()})
        registry = CollectionRegistry()
        registry.register(define_collection("blog", "page", "blog/*.md", schema))
        registry.register(define_collection("notes", "page", "notes/*.md", schema))
        registry.register(
            define_collection(
                "pages",
                "page",
                [{"include": "blog"}, {"include": "notes"}, "listing.yml"],
                s.obj({"links": s.array(s.string())}),
            )
        )
        return registry.freeze()

    def test_included_files_use_their_own_schema(self, registry, tmp_path, markdown_writer):
        markdown_writer(tmp_path / "blog" / "a.md", {"title": "A"})
        markdown_writer(tmp_path / "notes" / "b.md", {"title": "B"})
        report = ContentLoader(registry, tmp_path).load("pages")
        assert report.is_healthy
        assert list(report.records()) == ["blog/a.md", "notes/b.md"]

    def test_own_files_use_aggregate_schema(self, registry, tmp_path, yaml_writer):
        yaml_writer(tmp_path / "listing.yml", {"title": "Listing"})
        report = ContentLoader(registry, tmp_path).load("pages")
        [failed] = report.failed()
        assert failed.document == "listing.yml"
        assert [(e.path, e.kind) for e in failed.errors] == [
            ("links", FieldErrorKind.MISSING_REQUIRED_FIELD)
        ]

    def test_included_errors_reported_against_own_schema(self, registry, tmp_path, markdown_writer):
        markdown_writer(tmp_path / "blog" / "a.md", {"title": 3})
        [failed] = ContentLoader(registry, tmp_path).load("pages").failed()
        assert [(e.path, e.kind) for e in failed.errors] == [("title", FieldErrorKind.TYPE_MISMATCH)]

    def test_one_empty_include_is_fine(self, registry, tmp_path, markdown_writer):
        markdown_writer(tmp_path / "blog" / "a.md", {"title": "A"})
        report = ContentLoader(registry, tmp_path).load("pages")
        assert report.is_healthy
        assert list(report.records()) == ["blog/a.md"]

    def test_nothing_resolved_is_unresolvable(self, registry, tmp_path):
        report = ContentLoader(registry, tmp_path).load("pages")
        assert [entry.document for entry in report.failed()] == ["include:blog", "include:notes"]
        errors = [e for entry in report.failed() for e in entry.errors]
        assert {e.kind for e in errors} == {FieldErrorKind.UNRESOLVABLE_INCLUDE}
        assert "notes/*.md" in errors[1].message

    def test_collection_without_includes_may_be_empty(self, registry, tmp_path):
        assert ContentLoader(registry, tmp_path).load("notes").is_healthy
