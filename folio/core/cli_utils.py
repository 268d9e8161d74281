#!/usr/bin/env python3
"""
cli_utils.py
-------------------
Shared CLI helpers for Folio commands.

Functions:
    setup_logger: Initialize a FolioLogger for CLI operations
    folio_cli_group: Decorator building a click group with standard options

Usage:
    from folio.core.cli_utils import folio_cli_group

    @folio_cli_group("cli")
    def cli(ctx):
        '''folio - Content schema validation'''
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from functools import wraps
from pathlib import Path
from typing import Callable

# --- Third party imports ---
import click

# --- Local imports ---
from folio.core.logging_manager import FolioLogger
from folio.core.paths import CONTENT_DIR, CONTENT_DIR_ENVVAR, LOG_DIR


def setup_logger(log_dir: Path, component_name: str) -> FolioLogger:
    """
    Setup logging for CLI operations.

    Creates the operations log directory if it doesn't exist and initializes
    a FolioLogger for the specified component.

    Args:
        log_dir: Base log directory (typically paths.LOG_DIR)
        component_name: Component identifier for logging (e.g. 'cli')

    Returns:
        Configured FolioLogger instance
    """
    operations_log_dir = Path(log_dir) / "operations"
    operations_log_dir.mkdir(parents=True, exist_ok=True)
    return FolioLogger(operations_log_dir, component_name=component_name)


def folio_cli_group(component_name: str) -> Callable:
    """
    Decorator factory for creating consistent CLI groups.

    Adds --content-dir, --log-dir and --verbose options and fills the
    click context object:
        ctx.obj["content_dir"]: Path - Content root
        ctx.obj["log_dir"]: Path - Log directory
        ctx.obj["verbose"]: bool - Verbose flag
        ctx.obj["logger"]: FolioLogger - Configured logger instance

    Args:
        component_name: Component identifier for logging
    """

    def decorator(f: Callable) -> Callable:
        @click.group()
        @click.option(
            "--content-dir",
            type=click.Path(file_okay=False),
            default=str(CONTENT_DIR),
            envvar=CONTENT_DIR_ENVVAR,
            show_envvar=True,
            help="Root directory of the site content",
        )
        @click.option(
            "--log-dir",
            type=click.Path(file_okay=False),
            default=str(LOG_DIR),
            help="Directory for log files",
        )
        @click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
        @click.pass_context
        @wraps(f)
        def wrapper(ctx: click.Context, content_dir: str, log_dir: str, verbose: bool):
            ctx.ensure_object(dict)
            ctx.obj["content_dir"] = Path(content_dir)
            ctx.obj["log_dir"] = Path(log_dir)
            ctx.obj["verbose"] = verbose
            ctx.obj["logger"] = setup_logger(Path(log_dir), component_name)
            return f(ctx)

        return wrapper

    return decorator
