"""CLI entry point for cachescope."""

from __future__ import annotations

import click
from dotenv import load_dotenv

from cachescope.commands.cache.cmd import cache
from cachescope.commands.mock.cmd import mock
from cachescope.commands.schema.cmd import schema

load_dotenv()


@click.group()
@click.version_option(version="0.1.0", prog_name="cachescope")
def cli() -> None:
    """Inspect GraphQL client caches and synthesize typed mock data."""


cli.add_command(schema)
cli.add_command(mock)
cli.add_command(cache)


if __name__ == "__main__":
    cli()
