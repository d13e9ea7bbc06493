"""charts-build generate-patch <package> - Save local changes as a patch."""

from __future__ import annotations

import typer
from rich.console import Console

from charts_build.cli.options import exit_on_error
from charts_build.core.package import Package

app = typer.Typer()
console = Console()


@app.callback(invoke_without_command=True)
def generate_patch(
    package: str = typer.Argument(help="Package name under packages/"),
) -> None:
    """Diff the upstream chart against the package working directory."""
    with exit_on_error():
        pkg = Package.load(package)
        written = pkg.generate_patch()
    if written:
        console.print(f"[green]Patch written to {pkg.patch_path}[/green]")
    else:
        console.print(f"[dim]{pkg.name} has no local changes.[/dim]")
