"""charts-build check-rc-tags - Find images tagged as release candidates."""

from __future__ import annotations

import typer
from rich.console import Console

from charts_build.cli.options import OutputOption, exit_on_error
from charts_build.config.settings import settings
from charts_build.core.rc_tags import check_rc_tags
from charts_build.output.formatters import output_rc_tags

app = typer.Typer()
console = Console()


@app.callback(invoke_without_command=True)
def rc_tags(
    output: str = OutputOption,
) -> None:
    """List images referenced with -rc tags by the chart versions in release.yaml."""
    with exit_on_error():
        found = check_rc_tags(settings.repo_root)

    if not found:
        if output == "table":
            console.print("[green]No RC tags found.[/green]")
        else:
            output_rc_tags(found, output)
        return

    output_rc_tags(found, output)
    raise typer.Exit(code=1)
