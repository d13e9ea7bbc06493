"""charts-build prepare <package> - Pull upstream and apply the package patch."""

from __future__ import annotations

import typer
from rich.console import Console

from charts_build.cli.options import exit_on_error
from charts_build.core.package import Package

app = typer.Typer()
console = Console()


@app.callback(invoke_without_command=True)
def prepare(
    package: str = typer.Argument(help="Package name under packages/"),
) -> None:
    """Prepare a package's working directory from its upstream."""
    with exit_on_error():
        pkg = Package.load(package)
        pkg.prepare()
    console.print(f"[green]Prepared {pkg.name} in {pkg.working_dir}[/green]")
