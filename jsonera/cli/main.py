"""Click commands for tracking a JSON file's eras from the shell."""

from __future__ import annotations

import csv
import io
import json
from collections.abc import Sequence
from pathlib import Path

import click

from jsonera import __version__
from jsonera.config import ConfigError, load_config
from jsonera.ledger.diff import DocumentTooDeepError
from jsonera.ledger.era_document import EraDocument
from jsonera.ledger.store import StoreError, load_document, load_era_document, save_era_document
from jsonera.models.changes import Change
from jsonera.models.config import JsonEraConfig
from jsonera.observability.logging import LOG_FORMATS, get_logger, setup_logging
from jsonera.pointer import PointerError, format_pointer, parse_pointer

_FORMATS = ("table", "csv", "json")
_COLUMNS = ("json-pointer", "era", "mode")


def render_changes(changes: Sequence[Change], fmt: str = "table") -> str:
    """Render changes with the columns pointer, era and mode."""
    rows = [(c.pointer, str(c.era), c.mode.value) for c in changes]

    if fmt == "json":
        payload = [{"pointer": c.pointer, "path": list(c.path), "era": c.era, "mode": c.mode.value} for c in changes]
        return json.dumps(payload, indent=2)

    if fmt == "csv":
        buf = io.StringIO()
        writer = csv.writer(buf, lineterminator="\n")
        writer.writerow(_COLUMNS)
        writer.writerows(rows)
        return buf.getvalue().rstrip("\n")

    # The root pointer is the empty string; show it as "" so the column isn't blank.
    rows = [(pointer or '""', era, mode) for pointer, era, mode in rows]
    widths = [max(len(row[i]) for row in [_COLUMNS, *rows]) for i in range(len(_COLUMNS))]
    lines = ["  ".join(cell.ljust(widths[i]) for i, cell in enumerate(row)).rstrip() for row in [_COLUMNS, *rows]]
    return "\n".join(lines)


def _config(ctx: click.Context) -> JsonEraConfig:
    return ctx.obj["config"]


@click.group()
@click.version_option(__version__, prog_name="jsonera")
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"]),
    default=None,
    help="Log level for stderr output (defaults to JSONERA_LOG_LEVEL or warning)",
)
@click.option(
    "--log-format",
    type=click.Choice(list(LOG_FORMATS)),
    default=None,
    help="Log rendering on stderr (defaults to JSONERA_LOG_FORMAT or json)",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str | None, log_format: str | None) -> None:
    """jsonera - track when each property of a JSON document last changed."""
    ctx.ensure_object(dict)
    try:
        config = load_config()
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc
    if log_level is not None:
        config.log.level = log_level
    if log_format is not None:
        config.log.format = log_format
    setup_logging(config.log.level, config.log.format)
    ctx.obj["config"] = config


@cli.command()
@click.option(
    "--json",
    "json_file",
    required=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help="The JSON document to track",
)
@click.option(
    "--era",
    "era_file",
    required=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help="The era file; created on first use",
)
@click.option("-p", "--pretty", is_flag=True, help="Pretty-print the era file")
@click.option("--strict-era", is_flag=True, help="Reject malformed era files instead of repairing them")
@click.option("--format", "fmt", type=click.Choice(_FORMATS), default="table", help="Change output format")
@click.pass_context
def update(
    ctx: click.Context,
    json_file: Path,
    era_file: Path,
    pretty: bool,
    strict_era: bool,
    fmt: str,
) -> None:
    """Record a new snapshot of a JSON document and print what changed.

    The era file holds the previous snapshot, its era tree and the era
    counter.  It is created on first use, and rewritten only when the
    document changed.
    """
    config = _config(ctx)
    log = get_logger("cli.update")
    strict = strict_era or config.diff.strict_era
    pretty = pretty or config.output.pretty

    try:
        doc = load_document(json_file, max_depth=config.diff.max_depth)
        era_doc = load_era_document(era_file, strict=strict, max_depth=config.diff.max_depth)
        if era_doc is None:
            era_doc, changes = EraDocument.create(doc, max_depth=config.diff.max_depth)
            log.info("era_document_created", path=str(era_file))
        else:
            changes = era_doc.update(doc)

        if changes:
            save_era_document(era_file, era_doc, pretty=pretty)
    except (StoreError, DocumentTooDeepError) as exc:
        raise click.ClickException(str(exc)) from exc

    if changes:
        click.echo(render_changes(changes, fmt))


@cli.command()
@click.argument("old_file", type=click.Path(dir_okay=False, path_type=Path))
@click.argument("new_file", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--format", "fmt", type=click.Choice(_FORMATS), default="table", help="Change output format")
@click.pass_context
def diff(ctx: click.Context, old_file: Path, new_file: Path, fmt: str) -> None:
    """Print the changes between two JSON files without an era file.

    OLD_FILE is recorded at era 1 and NEW_FILE compared at era 2, so
    properties present in OLD_FILE report era 1.
    """
    config = _config(ctx)
    try:
        old_doc = load_document(old_file, max_depth=config.diff.max_depth)
        new_doc = load_document(new_file, max_depth=config.diff.max_depth)
        era_doc, _ = EraDocument.create(old_doc, max_depth=config.diff.max_depth)
        changes = era_doc.update(new_doc)
    except (StoreError, DocumentTooDeepError) as exc:
        raise click.ClickException(str(exc)) from exc

    if changes:
        click.echo(render_changes(changes, fmt))


@cli.group()
def pointer() -> None:
    """Format and parse RFC 6901 JSON Pointers."""


@pointer.command("format")
@click.argument("segments", nargs=-1)
def pointer_format(segments: tuple[str, ...]) -> None:
    """Join SEGMENTS into a single JSON Pointer."""
    click.echo(format_pointer(segments))


@pointer.command("parse")
@click.argument("token")
def pointer_parse(token: str) -> None:
    """Split TOKEN into its segments, one per line."""
    try:
        segments = parse_pointer(token)
    except PointerError as exc:
        raise click.ClickException(str(exc)) from exc
    for segment in segments:
        click.echo(segment)
