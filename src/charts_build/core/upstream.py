"""Pull upstream chart sources into a package directory."""

from __future__ import annotations

import logging
import shutil
import tempfile
from pathlib import Path

from charts_build.errors import ChartsFilesystemError, GitOperationError, ToolUnavailableError
from charts_build.models import UpstreamKind
from charts_build.models.package import UpstreamOptions
from charts_build.utils.process import run_command

logger = logging.getLogger(__name__)


class LocalUpstream:
    """A chart kept as a plain directory, relative to the package or absolute."""

    def __init__(self, options: UpstreamOptions, package_dir: Path, working_dir: str = "charts"):
        self.options = options
        self.package_dir = package_dir
        self.working_dir = working_dir

    @property
    def source(self) -> Path:
        src = Path(self.options.url)
        if not src.is_absolute():
            src = self.package_dir / src
        if self.options.subdirectory:
            src = src / self.options.subdirectory
        return src

    def is_within_package(self) -> bool:
        """True when the upstream is the package working directory itself."""
        return self.source.resolve() == (self.package_dir / self.working_dir).resolve()

    def pull(self, dest: Path) -> None:
        src = self.source
        logger.info("pulling %s into %s", src, dest)
        if not src.is_dir():
            raise ChartsFilesystemError(f"upstream directory {src} does not exist")
        if dest.exists():
            shutil.rmtree(dest)
        shutil.copytree(src, dest)


class GitUpstream:
    """A chart inside a git repository, optionally pinned to a commit."""

    def __init__(self, options: UpstreamOptions):
        self.options = options

    def is_within_package(self) -> bool:
        return False

    def _git(self, *args: str, cwd: Path | None = None) -> None:
        result = run_command(["git", *args], cwd=cwd)
        if result.code != 0:
            logger.error("git %s failed:\n%s", " ".join(args), result.combined_output)
            raise GitOperationError(
                f"git {' '.join(args)} failed",
                returncode=result.code,
                output=result.combined_output,
            )

    def pull(self, dest: Path) -> None:
        if shutil.which("git") is None:
            raise ToolUnavailableError("cannot find git on PATH")
        url, commit = self.options.url, self.options.commit
        logger.info("pulling %s@%s into %s", url, commit or "HEAD", dest)
        with tempfile.TemporaryDirectory(prefix="charts-build-") as tmp:
            clone = Path(tmp) / "upstream"
            if commit:
                self._git("clone", "--quiet", url, str(clone))
                self._git("checkout", "--quiet", commit, cwd=clone)
            else:
                self._git("clone", "--quiet", "--depth", "1", url, str(clone))

            src = clone / self.options.subdirectory if self.options.subdirectory else clone
            if not src.is_dir():
                raise ChartsFilesystemError(
                    f"subdirectory {self.options.subdirectory} not found in {url}"
                )
            if dest.exists():
                shutil.rmtree(dest)
            shutil.copytree(src, dest, ignore=shutil.ignore_patterns(".git"))


def get_upstream(
    options: UpstreamOptions, package_dir: Path, working_dir: str = "charts"
) -> LocalUpstream | GitUpstream:
    if options.kind is UpstreamKind.GIT:
        return GitUpstream(options)
    return LocalUpstream(options, package_dir, working_dir)
