"""Table / JSON / YAML output dispatch."""

from __future__ import annotations

import json

import yaml
from rich.console import Console

from charts_build.models.lifecycle import Status

console = Console()


def output_status(status: Status, fmt: str) -> None:
    if fmt == "json":
        data = {"summary": status.summary, "buckets": status.to_dict()}
        console.print_json(json.dumps(data, indent=2))
    elif fmt == "yaml":
        data = {"summary": status.summary, "buckets": status.to_dict()}
        console.print(yaml.dump(data, default_flow_style=False))
    else:
        from charts_build.output.tables import status_table
        console.print(status_table(status))


def output_rc_tags(rc_tags: dict[str, list[str]], fmt: str) -> None:
    if fmt == "json":
        console.print_json(json.dumps(rc_tags, indent=2))
    elif fmt == "yaml":
        console.print(yaml.dump(rc_tags, default_flow_style=False))
    else:
        from charts_build.output.tables import rc_tags_table
        console.print(rc_tags_table(rc_tags))
