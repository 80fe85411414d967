"""CLI entry point for inspecting persisted logs: greenlog.

Subcommands:
    greenlog show app.log [--level error] [--offset 10]
    greenlog search app.log -t timeout -t refused [-f message] [--limit 100]
"""

from __future__ import annotations

import sys

import click

from greenlog.core.logging import setup_logging
from greenlog.exceptions import RecordDecodeError
from greenlog.formatter import default_formatter
from greenlog.models import Level, Record
from greenlog.search import load_records, search

_LEVEL_CHOICES = [lvl.name.lower() for lvl in Level]


def _load(path: str) -> list[Record]:
    try:
        return load_records(path)
    except RecordDecodeError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
def main(verbose: bool) -> None:
    """GreenLog: inspect and search persisted log files."""
    setup_logging("DEBUG" if verbose else None)


@main.command("show")
@click.argument("log_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--level", type=click.Choice(_LEVEL_CHOICES), default=None, help="Only this level")
@click.option("--offset", type=int, default=0, show_default=True, help="Skip the first N records")
def show(log_file: str, level: str | None, offset: int) -> None:
    """Print persisted records using the default formatter."""
    records = _load(log_file)[offset:]
    if level is not None:
        wanted = Level.from_name(level)
        records = [r for r in records if r.level == wanted]
    for record in records:
        click.echo(default_formatter(record))


@main.command("search")
@click.argument("log_file", type=click.Path(exists=True, dir_okay=False))
@click.option("-t", "--term", "terms", multiple=True, required=True, help="Search term (repeatable)")
@click.option("-f", "--field", "fields", multiple=True, help="Field to search (default: message)")
@click.option("--limit", type=int, default=0, show_default=True, help="Max records scanned (0 = all)")
def search_cmd(log_file: str, terms: tuple[str, ...], fields: tuple[str, ...], limit: int) -> None:
    """Case-insensitive substring search, grouped by term."""
    records = _load(log_file)
    found = search(terms, fields or ("message",), records, limit)
    if not found:
        click.echo("No matches.")
        return
    for term, matches in found.items():
        click.echo(f"{term} ({len(matches)}):")
        for record in matches:
            click.echo(f"  {default_formatter(record)}")
