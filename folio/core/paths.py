#!/usr/bin/env python3
"""
paths.py
-------------------
Path constants for the Folio project.

The project structure:
    ROOT/
    ├── folio/         # Library and CLI code
    ├── content/       # Site content (yml data files, md pages)
    └── logs/          # Validation run logs

Paths are defaults only; every CLI command accepts overrides.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from pathlib import Path


def _get_project_root() -> Path:
    """
    Determine project root directory.

    Assumes this file is at ROOT/folio/core/paths.py.
    """
    return Path(__file__).resolve().parent.parent.parent


ROOT: Path = _get_project_root()

# ---- Content ----
CONTENT_DIR = ROOT / "content"

# ---- Logs ----
LOG_DIR = ROOT / "logs"

# Environment variable consulted by the CLI for the content directory
CONTENT_DIR_ENVVAR = "FOLIO_CONTENT_DIR"
