"""Fetch command: read one snapshot and print it."""

from __future__ import annotations

import asyncio
import sys
from typing import TYPE_CHECKING

import click

from scoreline.errors import FetchError
from scoreline.feed.base import open_source

from ._config import load_config_or_exit

if TYPE_CHECKING:
    from scoreline.core.models import Snapshot


async def _fetch_once(location: str, timeout: float) -> Snapshot:
    source = open_source(location, timeout=timeout)
    try:
        return await source.fetch()
    finally:
        await source.aclose()


@click.command()
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Config file (config.toml or a legacy appsettings.json)",
)
@click.option("--data-url", default=None, help="StreamControl JSON URL or file path")
def fetch(config_path: str | None, data_url: str | None) -> None:
    """Fetch the current snapshot once and print its fields."""
    config = load_config_or_exit(config_path)
    location = data_url or config.general.data_url

    try:
        snapshot = asyncio.run(_fetch_once(location, config.general.request_timeout))
    except FetchError as exc:
        click.secho(f"Fetch failed: {exc}", fg="red", err=True)
        sys.exit(1)

    for name, value in snapshot.model_dump(by_alias=True).items():
        if value is None:
            continue
        click.echo(f"{click.style(name, bold=True)}: {value}")
    if visibility := snapshot.score_visibility:
        click.echo(f"score visibility: {visibility.name.lower()}")
