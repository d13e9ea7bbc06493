"""Data models for charts-build."""

from __future__ import annotations

import enum


class LogLevel(enum.Enum):
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"
    END = "END"


class UpstreamKind(enum.Enum):
    LOCAL = "local"
    GIT = "git"
