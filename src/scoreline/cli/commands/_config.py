"""Config loading shared by subcommands."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from scoreline.config import ScorelineConfig
from scoreline.errors import ConfigError


def load_config_or_exit(config_path: str | None) -> ScorelineConfig:
    """Load the configuration, exiting with a red message when it is invalid."""
    try:
        return ScorelineConfig.load(Path(config_path) if config_path else None)
    except ConfigError as exc:
        click.secho(str(exc), fg="red", err=True)
        sys.exit(1)
