#!/usr/bin/env python3
"""
fragments.py
------------
Reusable sub-schemas shared by the site collections.

Each factory returns a fresh, fully-formed ObjectNode. Embedding a
fragment is composition by value: the hero images, product gallery and
author avatars all use create_image_schema(), and specialising one
usage (optional(), extra metadata) never affects the others.

Fragments:
    - base: title + description, extended by section schemas
    - button: label with optional icon, link and appearance options
    - image: media-picker source + alt text
    - author: name with optional profile links and avatar image
    - testimonial: quote attributed to an author
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from typing import Tuple

# --- Local imports ---
from folio.schema import builders as s
from folio.schema.nodes import ObjectNode

BUTTON_COLORS: Tuple[str, ...] = ("primary", "neutral", "success", "warning", "error", "info")
BUTTON_SIZES: Tuple[str, ...] = ("xs", "sm", "md", "lg", "xl")
BUTTON_VARIANTS: Tuple[str, ...] = ("solid", "outline", "subtle", "soft", "ghost", "link")
LINK_TARGETS: Tuple[str, ...] = ("_blank", "_self")


def create_base_schema() -> ObjectNode:
    """Section heading shared by most page sections."""
    return s.obj({
        "title": s.string(),
        "description": s.string(),
    })


def create_button_schema() -> ObjectNode:
    return s.obj({
        "label": s.string(),
        "icon": s.string().optional(),
        "to": s.string().optional(),
        "color": s.enum(BUTTON_COLORS).optional(),
        "size": s.enum(BUTTON_SIZES).optional(),
        "variant": s.enum(BUTTON_VARIANTS).optional(),
        "target": s.enum(LINK_TARGETS).optional(),
    })


def create_image_schema() -> ObjectNode:
    return s.obj({
        "src": s.string().editor(input="media"),
        "alt": s.string(),
    })


def create_author_schema() -> ObjectNode:
    return s.obj({
        "name": s.string(),
        "description": s.string().optional(),
        "username": s.string().optional(),
        "twitter": s.string().optional(),
        "to": s.string().optional(),
        "avatar": create_image_schema().optional(),
    })


def create_testimonial_schema() -> ObjectNode:
    return s.obj({
        "quote": s.string(),
        "author": create_author_schema(),
    })
