"""CLI commands for cache snapshots: browse entries, pick link targets, follow references."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import click
from rich.markup import escape
from rich.table import Table

from cachescope.commands.cache.loader import CacheSnapshotError, load_cache_snapshot
from cachescope.helpers.console import console, truncate


def _load_snapshot_or_exit(cache_path: str) -> dict[str, Any]:
    try:
        return load_cache_snapshot(cache_path)
    except CacheSnapshotError as e:
        console.print(
            f"[red]Could not load cache {escape(Path(cache_path).name)}: {escape(str(e))}[/red]"
        )
        sys.exit(1)


@click.group()
def cache() -> None:
    """Cache tools: inspect a normalized cache snapshot."""


@cache.command()
@click.argument("cache_path", type=click.Path(exists=True))
@click.option("--search", default=None, help="Filter on cache ID, typename or content")
def inspect(cache_path: str, search: str | None) -> None:
    """Summarize a cache snapshot, entries grouped by typename."""
    from cachescope.commands.cache.entities import group_entries, root_entries

    snapshot = _load_snapshot_or_exit(cache_path)

    roots = root_entries(snapshot)
    if roots:
        table = Table(title="Root Entries")
        table.add_column("Key", style="cyan")
        table.add_column("Fields", justify="right")
        for key, record in roots:
            table.add_row(key, str(len(record)))
        console.print(table)
        console.print()

    groups = group_entries(snapshot, search)
    if not groups:
        console.print("[yellow]No matching entries[/yellow]")
        return

    table = Table(title="Entries")
    table.add_column("Typename", style="cyan")
    table.add_column("Cache ID")
    table.add_column("Fields", justify="right")
    for typename, rows in groups.items():
        for cache_id, record in rows:
            table.add_row(escape(typename), escape(cache_id), str(len(record)))
    console.print(table)
    console.print(f"  {sum(len(rows) for rows in groups.values())} entries in {len(groups)} types")


@cache.command()
@click.argument("schema_path", type=click.Path(exists=True))
@click.argument("cache_path", type=click.Path(exists=True))
@click.argument("type_name")
@click.option("--search", default=None, help="Filter on cache ID or content")
def entities(schema_path: str, cache_path: str, type_name: str, search: str | None) -> None:
    """List cache entries that can be linked as TYPE_NAME."""
    from cachescope.commands.cache.entities import filter_entities, list_entities_of_type
    from cachescope.commands.schema.cmd import load_schema_or_exit

    schema = load_schema_or_exit(schema_path)
    snapshot = _load_snapshot_or_exit(cache_path)

    options = filter_entities(list_entities_of_type(snapshot, type_name, schema), search)
    if not options:
        console.print(f"[yellow]No {escape(type_name)} entities in cache[/yellow]")
        return

    table = Table(title=f"{escape(type_name)} ({len(options)} available)")
    table.add_column("Cache ID", style="cyan")
    table.add_column("Label")
    for option in options:
        table.add_row(escape(option.id), escape(truncate(option.label, 80)))
    console.print(table)


@cache.command()
@click.argument("cache_path", type=click.Path(exists=True))
@click.argument("cache_id")
@click.option("--follow", is_flag=True, default=False, help="Follow chained references")
def resolve(cache_path: str, cache_id: str, follow: bool) -> None:
    """Print the record stored under CACHE_ID as JSON."""
    from cachescope.commands.cache.entities import resolve_chain, resolve_reference

    snapshot = _load_snapshot_or_exit(cache_path)
    record = resolve_chain(snapshot, cache_id) if follow else resolve_reference(snapshot, cache_id)
    if record is None:
        console.print(f"[red]{escape(cache_id)} not found[/red]")
        sys.exit(1)
    click.echo(json.dumps(record, indent=2))
