"""charts-build patch generate|apply - Work with raw patch files."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from charts_build.cli.options import exit_on_error
from charts_build.config.settings import settings
from charts_build.core.patch_engine import PatchEngine

app = typer.Typer(no_args_is_help=True)
console = Console()


@app.command("generate")
def generate(
    src: Path = typer.Argument(help="Original directory"),
    dst: Path = typer.Argument(help="Modified directory"),
    patch_file: Path = typer.Argument(help="Where to write the patch"),
) -> None:
    """Write the unified diff turning SRC into DST. Paths are relative to the repository root."""
    with exit_on_error():
        written = PatchEngine(root=settings.repo_root).generate(patch_file, src, dst)
    if written:
        console.print(f"[green]Patch written to {patch_file}[/green]")
    else:
        console.print("[dim]No differences, no patch written.[/dim]")


@app.command("apply")
def apply(
    patch_file: Path = typer.Argument(help="Patch to apply"),
    dest_dir: Path = typer.Argument(help="Directory to patch"),
) -> None:
    """Apply PATCH_FILE to DEST_DIR with one leading path component stripped."""
    with exit_on_error():
        PatchEngine(root=settings.repo_root).apply(patch_file, dest_dir)
    console.print(f"[green]Applied {patch_file} to {dest_dir}[/green]")
