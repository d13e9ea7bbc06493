"""Prepare a package's chart from upstream and generate its patch."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from charts_build.config.settings import (
    GENERATED_CHANGES_DIR,
    PACKAGE_OPTIONS_FILE,
    PATCH_DIR,
    settings,
)
from charts_build.core.chart_yaml import standardize_chart_yaml
from charts_build.core.patch_engine import PatchEngine
from charts_build.core.upstream import get_upstream
from charts_build.errors import ChartsFilesystemError, ConfigError
from charts_build.models.package import PackageOptions
from charts_build.utils.yaml_io import load_yaml_mapping

logger = logging.getLogger(__name__)


class Package:
    """A chart under packages/<name>, built from an upstream plus a local patch."""

    def __init__(self, options: PackageOptions, package_dir: Path, engine: PatchEngine | None = None):
        self.options = options
        self.package_dir = package_dir
        # diff runs from the package dir so headers read charts-original/... and charts/...
        self.engine = engine or PatchEngine(root=package_dir)
        self.upstream = get_upstream(options.upstream, package_dir, options.working_dir)

    @classmethod
    def load(cls, name: str, packages_dir: Path | None = None) -> Package:
        package_dir = (packages_dir or settings.packages_dir) / name
        if not package_dir.is_dir():
            raise ConfigError(f"package {name} not found in {package_dir.parent}")
        data = load_yaml_mapping(package_dir / PACKAGE_OPTIONS_FILE)
        if not data.get("url"):
            raise ConfigError(f"package {name} does not declare an upstream url")
        return cls(PackageOptions.from_dict(name, data), package_dir)

    @property
    def name(self) -> str:
        return self.options.name

    @property
    def working_dir(self) -> Path:
        return self.package_dir / self.options.working_dir

    @property
    def original_dir(self) -> Path:
        return self.package_dir / f"{self.options.working_dir}-original"

    @property
    def patch_path(self) -> Path:
        return self.package_dir / GENERATED_CHANGES_DIR / PATCH_DIR / f"{self.options.working_dir}.patch"

    def prepare(self) -> None:
        """Pull the upstream into the working directory and apply the package patch."""
        if self.upstream.is_within_package():
            logger.info("local chart %s does not need to be pulled", self.name)
            standardize_chart_yaml(self.working_dir)
            return

        logger.info("cleaning up %s before preparing", self.working_dir)
        if self.working_dir.exists():
            shutil.rmtree(self.working_dir)
        self.upstream.pull(self.working_dir)
        standardize_chart_yaml(self.working_dir)

        if self.patch_path.exists():
            self.engine.apply(self.patch_path, self.working_dir)
        else:
            logger.info("no patch found for %s", self.name)

    def generate_patch(self) -> bool:
        """Diff the pristine upstream against the working directory.

        Returns True if a patch was written. A stale patch is removed when the
        working directory matches upstream again.
        """
        if self.upstream.is_within_package():
            logger.info("local chart %s does not need to be patched", self.name)
            return False
        if not self.working_dir.is_dir():
            raise ChartsFilesystemError(f"working directory {self.working_dir} has not been prepared yet")

        standardize_chart_yaml(self.working_dir)
        try:
            self.upstream.pull(self.original_dir)
            standardize_chart_yaml(self.original_dir)
            written = self.engine.generate(
                self.patch_path,
                self.original_dir.relative_to(self.package_dir),
                self.working_dir.relative_to(self.package_dir),
            )
        finally:
            if self.original_dir.exists():
                shutil.rmtree(self.original_dir)

        if not written and self.patch_path.exists():
            logger.info("removing stale patch %s", self.patch_path)
            self.patch_path.unlink()
        return written
