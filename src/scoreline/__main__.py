"""CLI entry point for scoreline."""

from __future__ import annotations

from scoreline.cli.commands.root import cli


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
