"""
conftest.py
-----------
Shared pytest fixtures for Folio tests.

Provides fixtures for:
- The site collection registry
- Valid raw records for the site collections
- A temporary content directory populated with sample files
"""
import pytest
from pathlib import Path

import yaml

from folio.registry.site import build_site_registry


# ----- Registry Fixtures -----

@pytest.fixture
def site_registry():
    """Frozen registry of the site collections."""
    return build_site_registry()


# ----- Raw Record Fixtures -----

@pytest.fixture
def project_record():
    """Valid raw record for the projects collection."""
    return {
        "title": "Folio",
        "description": "Content schemas for static sites",
        "image": "/projects/folio.png",
        "url": "https://example.com/folio",
        "tags": ["python", "yaml"],
        "date": "2024-03-01",
    }


@pytest.fixture
def author_record():
    """Valid raw author fragment."""
    return {
        "name": "Sam Rivera",
        "username": "srivera",
        "avatar": {"src": "/avatars/sam.png", "alt": "Sam Rivera"},
    }


@pytest.fixture
def blog_post_record(author_record):
    """Valid raw frontmatter for the blog collection."""
    return {
        "title": "Schemas all the way down",
        "minRead": 6,
        "date": "2024-02-10",
        "image": "/blog/schemas.png",
        "author": author_record,
    }


@pytest.fixture
def product_record():
    """Valid raw frontmatter for the products collection (required fields only)."""
    return {
        "price": 49.5,
        "image": "/products/mug.png",
        "category": "Kitchen",
        "sku": "MUG-001",
        "publishedAt": "2024-05-20",
    }


@pytest.fixture
def index_record(author_record):
    """Valid raw record for the index page."""
    return {
        "hero": {
            "links": [{"label": "Contact", "to": "/contact", "color": "primary"}],
            "images": [{"src": "/hero/1.png", "alt": "Hero"}],
        },
        "about": {"title": "About", "description": "Who I am"},
        "experience": {
            "title": "Experience",
            "description": "Where I worked",
            "items": [
                {
                    "date": "2022-09-01",
                    "position": "Engineer",
                    "company": {
                        "name": "Acme",
                        "url": "https://acme.example",
                        "logo": "i-simple-icons-acme",
                        "color": "#ff0000",
                    },
                }
            ],
        },
        "testimonials": [{"quote": "Great work", "author": author_record}],
        "blog": {"title": "Blog", "description": "Latest posts"},
        "faq": {
            "title": "FAQ",
            "description": "Questions",
            "categories": [
                {
                    "title": "General",
                    "questions": [{"label": "Why?", "content": "Because."}],
                }
            ],
        },
    }


# ----- Content Directory Fixtures -----

def write_yaml(path: Path, data: dict) -> None:
    """Write a YAML data file, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")


def write_markdown(path: Path, frontmatter: dict, body: str = "Body text.") -> None:
    """Write a Markdown file with YAML frontmatter."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fm = yaml.safe_dump(frontmatter, sort_keys=False)
    path.write_text(f"---\n{fm}---\n\n{body}\n", encoding="utf-8")


@pytest.fixture
def content_dir(tmp_path, project_record, blog_post_record, product_record):
    """Content root with one valid document for projects, blog and products."""
    root = tmp_path / "content"
    write_yaml(root / "projects" / "folio.yml", project_record)
    write_markdown(root / "blog" / "schemas.md", blog_post_record, "# Schemas\n\nText.")
    write_markdown(root / "products" / "mug.md", product_record)
    return root


@pytest.fixture
def yaml_writer():
    """Helper writing YAML data files."""
    return write_yaml


@pytest.fixture
def markdown_writer():
    """Helper writing Markdown files with frontmatter."""
    return write_markdown
