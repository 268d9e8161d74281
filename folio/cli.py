#!/usr/bin/env python3
"""
cli.py
------
Command-line interface for Folio content validation.

Commands:
    - collections: List registered collections and their sources
    - schema: Print a collection's effective schema as JSON Schema
    - validate: Validate content files against their collection schemas

Usage:
    folio collections
    folio schema products
    folio --content-dir site/content validate
    folio validate -c blog -c projects
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import json
from typing import Dict, Tuple

# --- Third party imports ---
import click

# --- Local imports ---
from folio.core.cli_utils import folio_cli_group
from folio.core.exceptions import SchemaDefinitionError, UnknownCollectionError
from folio.core.logging_manager import handle_cli_error
from folio.registry.registry import CollectionRegistry
from folio.registry.site import build_site_registry
from folio.validation.validator import ValidationReport


def _registry(ctx: click.Context) -> CollectionRegistry:
    """Build the site registry once per invocation."""
    if "registry" not in ctx.obj:
        try:
            ctx.obj["registry"] = build_site_registry(logger=ctx.obj.get("logger"))
        except SchemaDefinitionError as e:
            handle_cli_error(ctx, e, "build_registry")
    return ctx.obj["registry"]


def format_report(name: str, report: ValidationReport, verbose: bool = False) -> str:
    """Render one collection's report for the terminal."""
    lines = []
    for document, reason in report.unreadable:
        lines.append(f"❌ {document}")
        lines.append(f"   {reason}")
    for entry in report.results:
        if entry.ok:
            if verbose:
                lines.append(f"✅ {entry.document}")
            continue
        lines.append(f"❌ {entry.document}")
        for error in entry.errors:
            lines.append(f"   {error}")

    status = "✅" if report.is_healthy else "❌"
    lines.append(
        f"{status} {name}: {report.documents_checked} document(s), "
        f"{report.documents_with_errors} invalid, {report.total_errors} error(s)"
        + (f", {len(report.unreadable)} unreadable" if report.unreadable else "")
    )
    return "\n".join(lines)


@folio_cli_group("cli")
def cli(ctx: click.Context) -> None:
    """
    Folio - content schema validation.

    Validate site content files against the schemas declared for
    their collections.
    """


@cli.command()
@click.pass_context
def collections(ctx: click.Context) -> None:
    """List registered collections."""
    registry = _registry(ctx)
    for descriptor in registry:
        sources = ", ".join(str(source) for source in descriptor.sources)
        fields = len(registry.schema_for(descriptor.name).fields)
        click.echo(f"{descriptor.name:<10} {descriptor.kind.value:<5} {fields:>3} fields  {sources}")


@cli.command()
@click.argument("name")
@click.pass_context
def schema(ctx: click.Context, name: str) -> None:
    """Print the JSON Schema of collection NAME."""
    from folio.schema.export import to_json_schema

    registry = _registry(ctx)
    try:
        rendered = to_json_schema(registry.schema_for(name))
    except UnknownCollectionError as e:
        handle_cli_error(ctx, e, "schema", {"collection": name})
    click.echo(json.dumps(rendered, indent=2))


@cli.command()
@click.option(
    "-c",
    "--collection",
    "names",
    multiple=True,
    help="Collection to validate (repeatable; default: all)",
)
@click.pass_context
def validate(ctx: click.Context, names: Tuple[str, ...]) -> None:
    """
    Validate content files.

    Every document is checked and every field error reported; the
    command exits with status 1 if any document is invalid.
    """
    from folio.loader.documents import ContentLoader

    registry = _registry(ctx)
    content_dir = ctx.obj["content_dir"]
    verbose = ctx.obj["verbose"]

    if not content_dir.is_dir():
        raise click.ClickException(f"Content directory not found: {content_dir}")

    click.echo(f"🔍 Validating content in {content_dir}\n")
    loader = ContentLoader(registry, content_dir, ctx.obj["logger"])

    reports: Dict[str, ValidationReport] = {}
    try:
        for name in names or registry.names():
            reports[name] = loader.load(name)
    except UnknownCollectionError as e:
        handle_cli_error(ctx, e, "validate", {"collection": e.name})

    for name, report in reports.items():
        click.echo(format_report(name, report, verbose))

    invalid = sum(r.documents_with_errors + len(r.unreadable) for r in reports.values())
    if invalid:
        raise click.ClickException(f"Found {invalid} invalid document(s)")
    click.echo("\n✅ All documents valid")


if __name__ == "__main__":
    cli()
