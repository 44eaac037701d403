"""Init command: write a default configuration file."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from scoreline.config import ScorelineConfig
from scoreline.paths import ensure_directories, get_config_path


@click.command()
@click.option(
    "--path",
    "target",
    type=click.Path(dir_okay=False),
    default=None,
    help="Where to write the config (defaults to the user config directory)",
)
@click.option("--force", is_flag=True, help="Overwrite an existing config")
def init(target: str | None, force: bool) -> None:
    """Write a default config.toml."""
    if target is None:
        ensure_directories()
        path = get_config_path()
    else:
        path = Path(target)

    if path.exists() and not force:
        click.secho(f"Config already exists: {path} (use --force to overwrite)", fg="yellow")
        sys.exit(1)

    ScorelineConfig().save(path)
    click.secho(f"Wrote {path}", fg="green")
