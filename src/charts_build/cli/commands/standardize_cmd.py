"""charts-build standardize <chart-dir> - Canonicalize Chart.yaml."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from charts_build.cli.options import exit_on_error
from charts_build.config.settings import settings
from charts_build.core.chart_yaml import standardize_chart_yaml

app = typer.Typer()
console = Console()


@app.callback(invoke_without_command=True)
def standardize(
    chart_dir: Path = typer.Argument(help="Chart directory, relative to the repository root"),
) -> None:
    """Rewrite a chart's Chart.yaml in Helm's canonical key order."""
    target = chart_dir if chart_dir.is_absolute() else settings.repo_root / chart_dir
    with exit_on_error():
        changed = standardize_chart_yaml(target)
    if changed:
        console.print(f"[green]Standardized {target / 'Chart.yaml'}[/green]")
    else:
        console.print(f"[dim]{target / 'Chart.yaml'} is already standard.[/dim]")
