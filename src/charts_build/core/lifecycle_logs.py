"""Plain-text lifecycle report files written under logs/."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import TextIO

from charts_build.core.version_rules import VersionRules
from charts_build.errors import ChartsFilesystemError
from charts_build.models import LogLevel
from charts_build.models.asset import AssetsMap

logger = logging.getLogger(__name__)

END_LINE = "_" * 30 + " END " + "_" * 30
HEAD_LINE = "=" * 65

_PY_LEVELS = {
    LogLevel.INFO: logging.INFO,
    LogLevel.WARN: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
}


class LifecycleLogs:
    """One report file. Use as a context manager so the file gets closed."""

    def __init__(self, path: Path, chart: str = ""):
        self.path = path
        self.chart = chart
        self._file: TextIO | None = None

    @classmethod
    def create(cls, logs_dir: Path, filename: str, chart: str = "") -> LifecycleLogs:
        logs = cls(logs_dir / filename, chart=chart)
        try:
            logs_dir.mkdir(parents=True, exist_ok=True)
            logs._file = logs.path.open("w", encoding="utf-8")
        except OSError as e:
            raise ChartsFilesystemError(f"unable to create log file {logs.path}: {e}") from e
        return logs

    def __enter__(self) -> LifecycleLogs:
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None

    def _emit(self, line: str) -> None:
        if self._file is None:
            raise ChartsFilesystemError(f"log file {self.path} is not open")
        self._file.write(line + "\n")

    def write_head(self, rules: VersionRules, title: str) -> None:
        now = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")
        self._emit(HEAD_LINE)
        self._emit(title)
        self._emit(f"Generated at: {now}")
        self._emit(f"Branch version: {rules.branch_version}")
        self._emit(f"Production branch: {rules.prod_branch}")
        self._emit(f"Development branch: {rules.dev_branch}")
        self._emit(f"Lifecycle window: {rules.min_version} <= version < {rules.max_version}")
        if self.chart:
            self._emit(f"Chart: {self.chart}")
        self._emit(HEAD_LINE)
        logger.info("%s", title)

    def write(self, message: str, level: LogLevel) -> None:
        if level is LogLevel.END:
            self._emit(END_LINE)
            self._emit("")
            return
        self._emit(f"[{level.value}] {message}")
        logger.log(_PY_LEVELS[level], "%s", message)

    def write_versions(self, assets: AssetsMap, level: LogLevel) -> None:
        for chart in sorted(assets):
            versions = [a.version for a in assets[chart]]
            self.write(f"{chart}: {', '.join(versions) if versions else '-'}", level)
