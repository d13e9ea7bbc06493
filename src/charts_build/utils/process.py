"""Blocking subprocess helpers."""

from __future__ import annotations

import logging
import shlex
import subprocess
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    code: int
    stdout: str
    stderr: str

    @property
    def combined_output(self) -> str:
        return (self.stdout + self.stderr).strip()


def run_command(
    cmd: list[str],
    cwd: Path | str | None = None,
    stdin: str | None = None,
) -> CommandResult:
    """Run ``cmd`` to completion and capture its output.

    Never raises on a non-zero exit status; callers decide which codes are
    acceptable. There is no timeout.
    """
    logger.debug("$> %s (cwd=%s)", " ".join(shlex.quote(c) for c in cmd), cwd or ".")
    proc = subprocess.run(
        cmd,
        cwd=cwd,
        input=stdin,
        text=True,
        capture_output=True,
        check=False,
    )
    return CommandResult(
        code=proc.returncode,
        stdout=proc.stdout or "",
        stderr=proc.stderr or "",
    )
