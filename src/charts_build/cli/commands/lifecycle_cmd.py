"""charts-build lifecycle-status - Compare chart versions across branches."""

from __future__ import annotations

import typer
from rich.console import Console

from charts_build.cli.options import ChartOption, OutputOption, exit_on_error
from charts_build.config.settings import settings
from charts_build.core.status_reporter import StatusReporter
from charts_build.output.formatters import output_status

app = typer.Typer()
console = Console()


@app.callback(invoke_without_command=True)
def lifecycle_status(
    chart: str = ChartOption,
    output: str = OutputOption,
) -> None:
    """Classify chart versions against the lifecycle rules and write reports to logs/."""
    with exit_on_error():
        reporter = StatusReporter(repo_dir=settings.repo_root)
        status = reporter.check_and_save(chart=chart)

    output_status(status, output)
    if output == "table":
        console.print(f"\n[dim]Reports written to {reporter.logs_dir}[/dim]")
        if status.summary["released_out_lifecycle"]:
            console.print("[red]Versions released outside of the lifecycle were found.[/red]")
