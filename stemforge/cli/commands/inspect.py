"""``stemforge variants`` and ``stemforge check`` — environment inspection."""

from __future__ import annotations

import shutil

from rich.console import Console
from rich.table import Table

from stemforge.config import BuilderSettings
from stemforge.variants import VARIANT_REGISTRY

console = Console()


def variants_cmd() -> None:
    """List stemcell variants and whether their templates are available."""
    settings = BuilderSettings()

    table = Table(title="Stemcell Variants")
    table.add_column("Type", style="cyan")
    table.add_column("Class")
    table.add_column("Extra options")
    table.add_column("Templates", justify="center")

    for kind, cls in VARIANT_REGISTRY.items():
        variant = cls()
        present = settings.template_dir(variant.template_name).is_dir()
        table.add_row(
            kind.value,
            cls.__name__,
            ", ".join(sorted(cls.option_keys)) or "-",
            "[green]Yes[/green]" if present else "[dim]No[/dim]",
        )
    console.print(table)


def check_cmd() -> None:
    """Show which external build tools are available on PATH."""
    settings = BuilderSettings()
    tools = [
        ("VM builder", settings.veewee_bin),
        ("VM exporter", settings.vagrant_bin),
        ("Agent gem build", settings.gem_bin),
        ("Remote download", settings.scp_bin),
    ]

    table = Table(title="External Tools")
    table.add_column("Role", style="cyan")
    table.add_column("Executable")
    table.add_column("Resolved path")

    for role, executable in tools:
        found = shutil.which(executable)
        table.add_row(role, executable, found or "[red]not found[/red]")
    console.print(table)
    console.print(f"[dim]Templates root: {settings.templates_root}[/dim]")
