"""CLI commands for mock data: synthesize defaults, append list items and build write fragments."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import click
from rich.markup import escape

from cachescope.config import DepthLimits
from cachescope.helpers.console import console


@click.group()
def mock() -> None:
    """Mock tools: default values and selection documents for schema types."""


@mock.command()
@click.argument("schema_path", type=click.Path(exists=True))
@click.argument("type_name")
@click.option("--max-depth", type=int, default=None, help="Nesting bound for object defaults")
def defaults(schema_path: str, type_name: str, max_depth: int | None) -> None:
    """Print a synthesized default value for TYPE_NAME as JSON."""
    from cachescope.commands.mock.defaults import synthesize_for_type
    from cachescope.commands.schema.cmd import load_schema_or_exit

    schema = load_schema_or_exit(schema_path)
    parsed = schema.get(type_name)
    if parsed is None:
        console.print(f"[red]Type {escape(type_name)} not found in schema[/red]")
        sys.exit(1)

    limits = DepthLimits.from_env()
    depth_bound = max_depth if max_depth is not None else limits.form_max_depth
    value = synthesize_for_type(parsed, schema, max_depth=depth_bound)
    click.echo(json.dumps(value, indent=2))


@mock.command()
@click.argument("schema_path", type=click.Path(exists=True))
@click.argument("type_name")
@click.option(
    "--data",
    "data_path",
    type=click.Path(exists=True),
    default=None,
    help="JSON value tree to select (defaults are synthesized when omitted)",
)
@click.option("--name", "fragment_name", default=None, help="Fragment name (default <Type>Mock)")
@click.option("--with-data", is_flag=True, default=False, help="Also print the write payload")
@click.option("--max-depth", type=int, default=None, help="Nesting bound for the document")
def fragment(
    schema_path: str,
    type_name: str,
    data_path: str | None,
    fragment_name: str | None,
    with_data: bool,
    max_depth: int | None,
) -> None:
    """Print the selection document for a value tree of TYPE_NAME."""
    from cachescope.commands.mock.defaults import build_empty_form_data
    from cachescope.commands.mock.fragment import build_fragment_data, build_selection_document
    from cachescope.commands.schema.cmd import load_schema_or_exit

    schema = load_schema_or_exit(schema_path)
    if schema.get(type_name) is None:
        console.print(f"[red]Type {escape(type_name)} not found in schema[/red]")
        sys.exit(1)

    limits = DepthLimits.from_env()
    if data_path:
        form_data = _load_value_tree(data_path)
    else:
        form_data = build_empty_form_data(
            schema.fields_of(type_name), schema, max_depth=limits.form_max_depth
        )

    document = build_selection_document(
        type_name,
        form_data,
        schema,
        fragment_name=fragment_name,
        max_depth=max_depth if max_depth is not None else limits.document_max_depth,
    )
    click.echo(document)
    if with_data:
        click.echo()
        click.echo(json.dumps(build_fragment_data(form_data, type_name), indent=2))


@mock.command()
@click.argument("schema_path", type=click.Path(exists=True))
@click.argument("type_name")
@click.argument("field_name")
@click.option(
    "--data",
    "data_path",
    type=click.Path(exists=True),
    default=None,
    help="JSON array of the items already in the list",
)
@click.option("--max-depth", type=int, default=None, help="Nesting bound for the new item")
def item(
    schema_path: str,
    type_name: str,
    field_name: str,
    data_path: str | None,
    max_depth: int | None,
) -> None:
    """Print the list field FIELD_NAME of TYPE_NAME with one default item appended."""
    from cachescope.commands.mock.defaults import append_list_item
    from cachescope.commands.schema.cmd import load_schema_or_exit
    from cachescope.commands.schema.types import is_list

    schema = load_schema_or_exit(schema_path)
    field_def = next((f for f in schema.fields_of(type_name) if f.name == field_name), None)
    if field_def is None:
        console.print(f"[red]Field {escape(type_name)}.{escape(field_name)} not found in schema[/red]")
        sys.exit(1)
    if not is_list(field_def.type):
        console.print(f"[red]{escape(type_name)}.{escape(field_name)} is not a list field[/red]")
        sys.exit(1)

    items: list[Any] = []
    if data_path:
        items = _load_json(data_path)
        if not isinstance(items, list):
            console.print("[red]Existing items must be a JSON array[/red]")
            sys.exit(1)

    limits = DepthLimits.from_env()
    depth_bound = max_depth if max_depth is not None else limits.item_max_depth
    value = append_list_item(items, field_def.type, schema, max_depth=depth_bound)
    click.echo(json.dumps(value, indent=2))


def _load_value_tree(data_path: str) -> dict[str, Any]:
    data = _load_json(data_path)
    if not isinstance(data, dict):
        console.print("[red]Value tree must be a JSON object[/red]")
        sys.exit(1)
    return data


def _load_json(data_path: str) -> Any:
    try:
        return json.loads(Path(data_path).read_text(encoding="utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        console.print(f"[red]{escape(Path(data_path).name)} is not valid JSON: {escape(str(e))}[/red]")
        sys.exit(1)
