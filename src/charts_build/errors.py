"""Exception hierarchy shared by all charts-build operations."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from charts_build.models.lifecycle import Status


class ChartsBuildError(Exception):
    """Base class for every error surfaced by charts-build."""


class ConfigError(ChartsBuildError):
    """A configuration file is missing, unreadable or malformed."""


class ChartsFilesystemError(ChartsBuildError):
    """A path is missing or could not be read/written."""


class ToolUnavailableError(ChartsBuildError):
    """An external binary could not be found on PATH."""


class IncompatibleToolVariantError(ChartsBuildError):
    """The external binary is a BSD/Apple variant instead of the GNU one."""


class SubprocessFailureError(ChartsBuildError):
    def __init__(self, message: str, returncode: int | None = None, output: str = ""):
        super().__init__(message)
        self.returncode = returncode
        self.output = output


class GitOperationError(SubprocessFailureError):
    """A git fetch, pull or checkout failed."""


class PolicyEvaluationError(ChartsBuildError):
    """A lifecycle predicate could not evaluate a version.

    ``status`` holds whatever was classified before the failure, when the
    error escaped a status computation.
    """

    def __init__(self, message: str, status: Status | None = None):
        super().__init__(message)
        self.status = status
