"""Generate and apply unified-diff patches with GNU diff/patch."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from charts_build.config.settings import settings
from charts_build.errors import (
    ChartsFilesystemError,
    IncompatibleToolVariantError,
    SubprocessFailureError,
    ToolUnavailableError,
)
from charts_build.utils.process import run_command

logger = logging.getLogger(__name__)

# Vendor markers of the BSD variants, whose flags and patch syntax differ from GNU
INCOMPATIBLE_VARIANTS = ("Apple", "FreeBSD")

DIFF_EXCLUDES = ("*.tgz", "*.lock")

# diff exit statuses
DIFF_IDENTICAL = 0
DIFF_DIFFERENT = 1


def remove_timestamps(patch: str) -> str:
    """Strip the timestamps GNU diff appends to ``---``/``+++`` header lines.

    Only a ``---`` line directly followed by a ``+++`` line is a header; hunk
    content is left alone.
    """
    lines = patch.splitlines(keepends=True)
    out: list[str] = []
    for i, line in enumerate(lines):
        is_old_header = line.startswith("--- ") and i + 1 < len(lines) and lines[i + 1].startswith("+++ ")
        is_new_header = line.startswith("+++ ") and i > 0 and lines[i - 1].startswith("--- ")
        if (is_old_header or is_new_header) and "\t" in line:
            line = line.split("\t", 1)[0].rstrip() + "\n"
        out.append(line)
    return "".join(out)


class PatchEngine:
    """Thin wrapper around the GNU diff and patch binaries.

    Relative paths are resolved against ``root``, which is also the working
    directory diff runs in, so patch headers carry root-relative paths.
    """

    def __init__(
        self,
        root: Path | str | None = None,
        diff_command: str | None = None,
        patch_command: str | None = None,
    ):
        self.root = Path(root) if root is not None else settings.repo_root
        self.diff_command = diff_command or settings.diff_command
        self.patch_command = patch_command or settings.patch_command

    def _resolve(self, path: Path | str) -> Path:
        p = Path(path)
        return p if p.is_absolute() else self.root / p

    def _tool_version(self, tool_path: str) -> str:
        result = run_command([tool_path, "--version"])
        if result.code != 0:
            raise SubprocessFailureError(
                f"unable to determine the version of {tool_path}",
                returncode=result.code,
                output=result.combined_output,
            )
        return result.stdout

    def _locate(self, tool: str) -> str:
        """Find ``tool`` on PATH and make sure it is the GNU variant."""
        tool_path = shutil.which(tool)
        if tool_path is None:
            raise ToolUnavailableError(f"cannot find GNU {tool} on PATH")
        version = self._tool_version(tool_path)
        if any(marker in version for marker in INCOMPATIBLE_VARIANTS):
            raise IncompatibleToolVariantError(
                f"detected Apple/FreeBSD version of {tool_path}, which produces incompatible patches. "
                f"Install GNU {tool}."
            )
        return tool_path

    def generate(self, patch_path: Path | str, src_path: Path | str, dst_path: Path | str) -> bool:
        """Write the patch turning ``src_path`` into ``dst_path`` to ``patch_path``.

        Returns False, writing nothing, when both trees are identical.
        """
        diff = self._locate(self.diff_command)
        for p in (src_path, dst_path):
            if not self._resolve(p).exists():
                raise ChartsFilesystemError(f"cannot generate patch: {p} does not exist")

        cmd = [diff, "-ruN"]
        for pattern in DIFF_EXCLUDES:
            cmd += ["-x", pattern]
        cmd += [str(src_path), str(dst_path)]
        result = run_command(cmd, cwd=self.root)

        if result.code not in (DIFF_IDENTICAL, DIFF_DIFFERENT):
            logger.error("unable to generate patch:\n%s", result.combined_output)
            raise SubprocessFailureError(
                f"diff exited with status {result.code}",
                returncode=result.code,
                output=result.combined_output,
            )
        if result.code == DIFF_IDENTICAL or not result.stdout:
            logger.debug("no differences between %s and %s", src_path, dst_path)
            return False

        target = self._resolve(patch_path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(remove_timestamps(result.stdout), encoding="utf-8")
        except OSError as e:
            raise ChartsFilesystemError(f"unable to write diff to {target}: {e}") from e
        logger.info("generated patch %s", patch_path)
        return True

    def apply(self, patch_path: Path | str, dest_dir: Path | str) -> None:
        """Apply ``patch_path`` inside ``dest_dir`` with ``patch -E -p1``.

        A failed apply may leave ``dest_dir`` partially patched.
        """
        logger.info("applying patch %s to %s", patch_path, dest_dir)
        patch = self._locate(self.patch_command)

        source = self._resolve(patch_path)
        target = self._resolve(dest_dir)
        try:
            content = source.read_text(encoding="utf-8")
        except OSError as e:
            raise ChartsFilesystemError(f"unable to read patch {source}: {e}") from e
        if not target.is_dir():
            raise ChartsFilesystemError(f"cannot apply patch: {target} is not a directory")

        result = run_command([patch, "-E", "-p1"], cwd=target, stdin=content)
        if result.code != 0:
            logger.error("unable to apply patch:\n%s", result.combined_output)
            raise SubprocessFailureError(
                f"patch exited with status {result.code}",
                returncode=result.code,
                output=result.combined_output,
            )
