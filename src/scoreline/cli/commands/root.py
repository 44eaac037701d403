"""Root CLI command registration."""

from __future__ import annotations

import click

from scoreline.version import get_scoreline_version

from .fetch import fetch
from .init import init
from .run import run


@click.group(invoke_without_command=True)
@click.option("--version", is_flag=True, help="Show version and exit")
@click.pass_context
def cli(ctx: click.Context, version: bool) -> None:
    """Live match overlay with two-language name rotation."""
    if version:
        click.echo(f"scoreline {get_scoreline_version()}")
        ctx.exit(0)

    if ctx.invoked_subcommand is None:
        ctx.invoke(run)


cli.add_command(run)
cli.add_command(init)
cli.add_command(fetch)
