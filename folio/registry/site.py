#!/usr/bin/env python3
"""
site.py
-------
The site's collection table.

This is the one place a deployment customises: each entry names a
collection, its kind, where its files live under the content root and
the schema its documents must satisfy.

Collections:
    - index: home page sections (hero, about, experience, testimonials, blog, faq)
    - projects: one YAML file per project
    - blog: Markdown posts with frontmatter
    - pages: projects.yml and blog.yml listing pages, aggregating the projects and blog entries
    - speaking: talks, podcasts and conferences
    - about: about page images and content
    - products: Markdown product pages with pricing and specs

Usage:
    from folio.registry.site import build_site_registry

    registry = build_site_registry()
    result = registry.validate("projects", raw)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from typing import List, Optional

# --- Local imports ---
from folio.core.logging_manager import FolioLogger
from folio.registry.descriptor import CollectionDescriptor, define_collection
from folio.registry.registry import CollectionRegistry
from folio.schema import builders as s
from folio.schema.fragments import (
    create_author_schema,
    create_base_schema,
    create_button_schema,
    create_image_schema,
    create_testimonial_schema,
)
from folio.schema.nodes import ObjectNode

SPEAKING_CATEGORIES = ("Live talk", "Podcast", "Conference")


# ----- Collection schemas -----

def index_schema() -> ObjectNode:
    return s.obj({
        "hero": s.obj({
            "links": s.array(create_button_schema()),
            "images": s.array(create_image_schema()),
        }),
        "about": create_base_schema(),
        "experience": create_base_schema().extend({
            "items": s.array(s.obj({
                "date": s.date(),
                "position": s.string(),
                "company": s.obj({
                    "name": s.string(),
                    "url": s.string(),
                    "logo": s.string().editor(input="icon"),
                    "color": s.string(),
                }),
            })),
        }),
        "testimonials": s.array(create_testimonial_schema()),
        "blog": create_base_schema(),
        "faq": create_base_schema().extend({
            "categories": s.array(s.obj({
                "title": s.string().non_empty(),
                "questions": s.array(s.obj({
                    "label": s.string().non_empty(),
                    "content": s.string().non_empty(),
                })),
            })),
        }),
    })


def project_schema() -> ObjectNode:
    return s.obj({
        "title": s.string().non_empty(),
        "description": s.string().non_empty(),
        "image": s.string().non_empty().editor(input="media"),
        "url": s.string().non_empty(),
        "tags": s.array(s.string()),
        "date": s.date(),
    })


def blog_post_schema() -> ObjectNode:
    return s.obj({
        "minRead": s.number(),
        "date": s.date(),
        "image": s.string().non_empty().editor(input="media"),
        "author": create_author_schema(),
    })


def listing_page_schema() -> ObjectNode:
    return s.obj({
        "links": s.array(create_button_schema()),
    })


def speaking_schema() -> ObjectNode:
    return s.obj({
        "links": s.array(create_button_schema()),
        "events": s.array(s.obj({
            "category": s.enum(SPEAKING_CATEGORIES),
            "title": s.string(),
            "date": s.date(),
            "location": s.string(),
            "url": s.string().optional(),
        })),
    })


def about_schema() -> ObjectNode:
    return s.obj({
        "content": s.obj({}),
        "images": s.array(create_image_schema()),
    })


def product_schema() -> ObjectNode:
    return s.obj({
        # Pricing
        "price": s.number().positive(),
        "originalPrice": s.number().positive().optional(),

        # Visuals
        "image": s.string().non_empty().editor(input="media"),
        "gallery": s.array(create_image_schema()).optional(),

        # Categorisation
        "category": s.string().non_empty(),
        "tags": s.array(s.string()).optional(),
        "sku": s.string().non_empty(),

        # Availability
        "inStock": s.boolean().with_default(True),
        "featured": s.boolean().with_default(False),

        "publishedAt": s.date(),
        "updatedAt": s.date().optional(),

        "features": s.array(s.string()).optional(),
        "specifications": s.obj({
            "dimensions": s.string().optional(),
            "weight": s.string().optional(),
            "material": s.string().optional(),
            "color": s.string().optional(),
        }).optional(),

        "cta": s.obj({
            "label": s.string().with_default("Add to Cart"),
            "url": s.string().is_url().optional(),
            "enabled": s.boolean().with_default(True),
        }).optional(),

        "seo": s.obj({
            "title": s.string().optional(),
            "description": s.string().optional(),
            "keywords": s.array(s.string()).optional(),
        }).optional(),
    })


# ----- Table -----

def site_collections() -> List[CollectionDescriptor]:
    """The collection table, in registration order (includes come last)."""
    return [
        define_collection("index", "page", "index.yml", index_schema()),
        define_collection("projects", "data", "projects/*.yml", project_schema()),
        define_collection("blog", "page", "blog/*.md", blog_post_schema()),
        # Included entries keep their own schemas; the listing files use this one
        define_collection(
            "pages",
            "page",
            [{"include": "projects"}, {"include": "blog"}, "projects.yml", "blog.yml"],
            listing_page_schema(),
        ),
        define_collection("speaking", "page", "speaking.yml", speaking_schema()),
        define_collection("about", "page", "about.yml", about_schema()),
        define_collection("products", "page", "products/*.md", product_schema()),
    ]


def build_site_registry(logger: Optional[FolioLogger] = None) -> CollectionRegistry:
    """
    Build and freeze the site registry.

    This is the explicit initialization entry point; callers keep the
    returned registry and pass it to loaders and validators.

    Raises:
        SchemaDefinitionError: If the collection table is inconsistent
    """
    registry = CollectionRegistry(logger=logger)
    registry.register_all(site_collections())
    return registry.freeze()
