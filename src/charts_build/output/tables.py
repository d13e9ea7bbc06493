"""Rich table builders for each command."""

from __future__ import annotations

from rich.table import Table

from charts_build.models import LogLevel
from charts_build.models.lifecycle import Status
from charts_build.output.themes import BUCKET_LEVELS, bucket_title, styled_level


def status_table(status: Status) -> Table:
    table = Table(title="Lifecycle Status", expand=True)
    table.add_column("Bucket", style="cyan", no_wrap=True)
    table.add_column("Level", no_wrap=True)
    table.add_column("Charts", justify="right", style="magenta")
    table.add_column("Versions", justify="right", style="bold")
    table.add_column("Detail", style="dim", max_width=60)

    summary = status.summary
    for name in Status.bucket_names():
        assets = getattr(status, name)
        level = BUCKET_LEVELS.get(name, LogLevel.INFO)
        charts = sorted(chart for chart, versions in assets.items() if versions)
        detail = ", ".join(
            f"{chart} ({', '.join(a.version for a in assets[chart])})" for chart in charts[:3]
        )
        if len(charts) > 3:
            detail += f", ... +{len(charts) - 3} more"
        table.add_row(
            bucket_title(name),
            styled_level(level),
            str(len(charts)),
            str(summary[name]),
            detail or "-",
        )
    return table


def rc_tags_table(rc_tags: dict[str, list[str]]) -> Table:
    table = Table(title="Images with RC tags", expand=True)
    table.add_column("Image", style="cyan", no_wrap=True)
    table.add_column("Tags", style="yellow")
    for image in sorted(rc_tags):
        table.add_row(image, ", ".join(rc_tags[image]))
    return table
