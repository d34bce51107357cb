"""Main Typer application — imports and registers all CLI commands.

Entry point: ``stemforge`` (configured via pyproject.toml scripts).
"""

from __future__ import annotations

import logging

import typer
from rich.logging import RichHandler

from stemforge.cli.commands.build import build_cmd
from stemforge.cli.commands.inspect import check_cmd, variants_cmd
from stemforge.config import BuilderSettings

app = typer.Typer(
    name="stemforge",
    help="stemforge: build BOSH stemcells with veewee and vagrant.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)


@app.callback()
def configure_logging(
    log_level: str = typer.Option(
        None, "--log-level", help="Override STEMFORGE_LOG_LEVEL."
    ),
) -> None:
    """Install a Rich log handler at the configured level."""
    level = (log_level or BuilderSettings().log_level).upper()
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=False, show_path=False)],
        force=True,
    )


app.command(name="build", help="Build a stemcell.")(build_cmd)
app.command(name="variants", help="List stemcell variants.")(variants_cmd)
app.command(name="check", help="Check external tool availability.")(check_cmd)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
