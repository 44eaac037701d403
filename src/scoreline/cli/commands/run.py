"""Run command: start the Textual overlay."""

from __future__ import annotations

import click

from scoreline.debug_log import export_logs_to_file

from ._config import load_config_or_exit


@click.command()
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Config file (config.toml or a legacy appsettings.json)",
)
@click.option("--data-url", default=None, help="StreamControl JSON URL or file path")
@click.option(
    "--interval",
    type=click.IntRange(min=1),
    default=None,
    help="Poll interval in milliseconds",
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Export the debug log here when the overlay exits",
)
def run(
    config_path: str | None,
    data_url: str | None,
    interval: int | None,
    log_file: str | None,
) -> None:
    """Start the overlay and poll the StreamControl feed."""
    from scoreline.ui.app import OverlayApp

    config = load_config_or_exit(config_path)
    if data_url is not None:
        config.general.data_url = data_url
    if interval is not None:
        config.general.update_interval = interval

    app = OverlayApp(config)
    try:
        app.run()
    finally:
        if log_file:
            count = export_logs_to_file(log_file)
            click.echo(f"Exported {count} log entries to {log_file}")
