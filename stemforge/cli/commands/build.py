"""``stemforge build`` — build a stemcell end to end.

Maps command-line options onto builder construction options, runs the
pipeline and prints the resulting archive path.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import typer
import yaml
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from stemforge.config import BuilderSettings
from stemforge.core.builder import StemcellBuilder
from stemforge.core.resolver import ConfigurationError
from stemforge.models.stages import StageState
from stemforge.stages import StageExecutionError

console = Console()
logger = logging.getLogger(__name__)


def _load_manifest_override(path: Path | None) -> dict[str, Any]:
    if path is None:
        return {}
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Manifest override {path} must be a mapping")
    return data


def build_cmd(
    stemcell_type: str = typer.Option(
        "noop", "--type", "-t", help="Stemcell variant (ubuntu, redhat, centos, centosmicro)."
    ),
    name: str = typer.Option(None, "--name", "-n", help="Stemcell and VM name."),
    agent_src_path: str = typer.Option(
        None, "--agent-src", help="Agent gem file or agent source directory."
    ),
    prefix: str = typer.Option(None, "--prefix", "-p", help="Staging directory."),
    target: str = typer.Option(None, "--target", help="Output archive path."),
    infrastructure: str = typer.Option(None, help="Target infrastructure (vsphere, aws, ...)."),
    architecture: str = typer.Option(None, help="Target architecture."),
    iso: str = typer.Option(None, help="ISO url."),
    iso_md5: str = typer.Option(None, "--iso-md5", help="MD5 of the ISO."),
    iso_filename: str = typer.Option(None, "--iso-filename", help="ISO file name."),
    manifest: Path = typer.Option(
        None, "--manifest", "-m", help="YAML mapping merged into stemcell.MF."
    ),
    release_manifest: str = typer.Option(None, help="[centosmicro] release manifest."),
    release_tar: str = typer.Option(None, help="[centosmicro] release tarball."),
    package_compiler_tar: str = typer.Option(
        None, help="[centosmicro] package compiler tarball or directory."
    ),
) -> None:
    """Build a stemcell: setup, build the VM, package the archive."""
    options: dict[str, Any] = {
        "type": stemcell_type,
        "name": name,
        "agent_src_path": agent_src_path,
        "prefix": prefix,
        "target": target,
        "infrastructure": infrastructure,
        "architecture": architecture,
        "iso": iso,
        "iso_md5": iso_md5,
        "iso_filename": iso_filename,
        "release_manifest": release_manifest,
        "release_tar": release_tar,
        "package_compiler_tar": package_compiler_tar,
    }
    options = {k: v for k, v in options.items() if v is not None}

    try:
        builder = StemcellBuilder(
            options, _load_manifest_override(manifest), settings=BuilderSettings()
        )
    except (ConfigurationError, OSError, yaml.YAMLError) as exc:
        console.print(f"[bold red]Configuration error:[/bold red] {exc}")
        raise typer.Exit(code=2)

    try:
        archive_path = builder.run()
    except StageExecutionError as exc:
        _print_stages(builder)
        console.print(f"[bold red]Build failed:[/bold red] {exc}")
        console.print(
            f"[dim]Staging directory left for inspection: {builder.config.prefix}[/dim]"
        )
        raise typer.Exit(code=1)

    _print_stages(builder)
    console.print()
    console.print(
        Panel(
            "\n".join([
                "[bold green]Stemcell built![/bold green]",
                "",
                f"[bold]Name:[/bold]     {builder.name}",
                f"[bold]Type:[/bold]     {builder.type}",
                f"[bold]Version:[/bold]  {builder.config.agent_version}",
                f"[bold]Archive:[/bold]  {archive_path}",
            ]),
            title="[bold]stemforge[/bold]",
            border_style="green",
            padding=(1, 2),
        )
    )


def _print_stages(builder: StemcellBuilder) -> None:
    table = Table(title="Pipeline")
    table.add_column("Stage", style="cyan")
    table.add_column("State")
    table.add_column("Duration", justify="right")
    for record in builder.stage_records:
        state = (
            "[green]PASSED[/green]"
            if record.state == StageState.PASSED
            else "[bold red]FAILED[/bold red]"
        )
        table.add_row(record.display_name, state, f"{record.duration_s:.1f}s")
    console.print(table)
