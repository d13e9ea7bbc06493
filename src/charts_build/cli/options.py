"""Shared CLI options and error handling."""

from __future__ import annotations

import contextlib
import logging
from typing import Iterator

import typer

from charts_build.errors import ChartsBuildError

logger = logging.getLogger(__name__)

OutputOption = typer.Option("table", "--output", "-o", help="Output format: table, json, yaml")
ChartOption = typer.Option("", "--chart", "-c", help="Only report on this chart")


@contextlib.contextmanager
def exit_on_error() -> Iterator[None]:
    """Turn a ChartsBuildError into a red message and exit code 1."""
    try:
        yield
    except ChartsBuildError as e:
        logger.debug("command failed", exc_info=True)
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from e
