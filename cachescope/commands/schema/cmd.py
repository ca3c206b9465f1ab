"""CLI commands for schemas: load an introspection result or SDL and list its types."""

from __future__ import annotations

import sys
from pathlib import Path

import click
from rich.markup import escape
from rich.table import Table

from cachescope.commands.schema.ingest import MalformedSchemaError, load_schema_file
from cachescope.commands.schema.types import (
    EnumType,
    FieldDef,
    InputObjectType,
    InterfaceType,
    ObjectType,
    ParsedSchema,
    ParsedType,
    UnionType,
)
from cachescope.helpers.console import console, truncate

KIND_LABELS = {
    "OBJECT": "Objects",
    "INTERFACE": "Interfaces",
    "UNION": "Unions",
    "ENUM": "Enums",
    "INPUT_OBJECT": "Input Types",
    "SCALAR": "Scalars",
}


def load_schema_or_exit(schema_path: str, verbose: bool = False) -> ParsedSchema:
    """Load a schema file for a command, printing a readable error on failure."""

    def on_skip(msg: str) -> None:
        if verbose:
            console.print(f"  [yellow]{escape(msg)}[/yellow]")

    try:
        schema = load_schema_file(schema_path, on_skip=on_skip)
    except MalformedSchemaError as e:
        console.print(f"[red]Could not load schema {escape(Path(schema_path).name)}: {escape(str(e))}[/red]")
        sys.exit(1)
    if verbose:
        console.print(f"  Loaded {len(schema.types)} types from {schema_path}")
    return schema


@click.group()
def schema() -> None:
    """Schema tools: inspect types from introspection JSON or SDL."""


@schema.command()
@click.argument("schema_path", type=click.Path(exists=True))
@click.option("--search", default=None, help="Only show types whose name contains this text")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Report skipped schema entries")
def inspect(schema_path: str, search: str | None, verbose: bool) -> None:
    """List the types of a schema, grouped by kind."""
    parsed = load_schema_or_exit(schema_path, verbose=verbose)

    console.print("[bold]Schema Summary[/bold]")
    console.print(f"  Query: {parsed.query_type or '-'}")
    console.print(f"  Mutation: {parsed.mutation_type or '-'}")
    console.print(f"  Subscription: {parsed.subscription_type or '-'}")
    console.print()

    groups = parsed.group_by_kind(search)
    if not groups:
        console.print("[yellow]No matching types[/yellow]")
        return

    for kind, members in groups.items():
        table = Table(title=f"{KIND_LABELS.get(kind, kind)} ({len(members)})")
        table.add_column("Name", style="cyan")
        table.add_column("Details")
        table.add_column("Description")
        for member in members:
            table.add_row(
                member.name,
                _details(member),
                escape(truncate(member.description or "", 60)),
            )
        console.print(table)


def _details(member: ParsedType) -> str:
    if isinstance(member, ObjectType):
        tags = [
            tag
            for tag, flag in (
                ("connection", member.is_connection),
                ("edge", member.is_edge),
                ("node", member.is_node),
            )
            if flag
        ]
        text = _field_count(member.fields)
        return f"{text} ({', '.join(tags)})" if tags else text
    if isinstance(member, InterfaceType):
        return f"{_field_count(member.fields)}, {len(member.possible_types)} implementations"
    if isinstance(member, UnionType):
        return " | ".join(member.possible_types)
    if isinstance(member, InputObjectType):
        return _field_count(member.fields)
    if isinstance(member, EnumType):
        return f"{len(member.values)} values"
    return ""


def _field_count(fields: list[FieldDef]) -> str:
    return f"{len(fields)} fields"
