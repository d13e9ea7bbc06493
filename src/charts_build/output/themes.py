"""Bucket severity and color maps."""

from charts_build.models import LogLevel

BUCKET_LEVELS: dict[str, LogLevel] = {
    "in_lifecycle_current_branch": LogLevel.INFO,
    "out_lifecycle_current_branch": LogLevel.WARN,
    "released_in_lifecycle": LogLevel.INFO,
    "not_released_out_lifecycle": LogLevel.INFO,
    "not_released_in_lifecycle": LogLevel.WARN,
    "released_out_lifecycle": LogLevel.ERROR,
    "to_be_released": LogLevel.INFO,
    "to_be_forward_ported": LogLevel.INFO,
}

LEVEL_COLORS: dict[LogLevel, str] = {
    LogLevel.INFO: "green",
    LogLevel.WARN: "yellow",
    LogLevel.ERROR: "red bold",
}


def styled_level(level: LogLevel) -> str:
    color = LEVEL_COLORS.get(level, "white")
    return f"[{color}]{level.value}[/{color}]"


def bucket_title(name: str) -> str:
    return name.replace("_", " ")
