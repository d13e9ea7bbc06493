"""Root Typer application, mounts sub-commands."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from charts_build.config.settings import settings

app = typer.Typer(
    name="charts-build",
    help="Build automation for a Helm chart monorepo.",
    no_args_is_help=True,
)


@app.callback()
def main_options(
    root: Optional[Path] = typer.Option(
        None, "--root", "-r", help="Repository root (default: $CHARTS_BUILD_ROOT or the current directory)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )
    if root is not None:
        settings.repo_root = root


def _register_commands() -> None:
    from charts_build.cli.commands.patch_cmd import app as patch_app
    from charts_build.cli.commands.prepare_cmd import app as prepare_app
    from charts_build.cli.commands.generate_patch_cmd import app as generate_patch_app
    from charts_build.cli.commands.standardize_cmd import app as standardize_app
    from charts_build.cli.commands.lifecycle_cmd import app as lifecycle_app
    from charts_build.cli.commands.rc_tags_cmd import app as rc_tags_app

    app.add_typer(patch_app, name="patch", help="Generate or apply a patch between two directories")
    app.add_typer(prepare_app, name="prepare", help="Pull a package's upstream and apply its patch")
    app.add_typer(generate_patch_app, name="generate-patch", help="Generate a package's patch")
    app.add_typer(standardize_app, name="standardize", help="Rewrite Chart.yaml in canonical form")
    app.add_typer(lifecycle_app, name="lifecycle-status", help="Check chart versions against lifecycle rules")
    app.add_typer(rc_tags_app, name="check-rc-tags", help="Find images with release-candidate tags")


_register_commands()


def main() -> None:
    app()
