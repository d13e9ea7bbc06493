"""Persist the lifecycle status snapshot and report what changed since the last run."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from deepdiff import DeepDiff

from charts_build.errors import ChartsFilesystemError
from charts_build.models.lifecycle import Status

logger = logging.getLogger(__name__)


def load_state(path: Path) -> dict | None:
    """Load a previous snapshot; a missing or corrupt file counts as none."""
    if not path.exists():
        return None
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        logger.debug("Corrupt state file %s, ignoring it", path, exc_info=True)
        return None


def diff_state(previous: dict, current: dict) -> list[str]:
    """Describe the changes between two snapshots in human-readable lines."""
    diff = DeepDiff(previous, current, ignore_order=True, verbose_level=2)
    return _format_diff(diff)


def save_state(status: Status, path: Path) -> list[str]:
    """Write ``status`` to ``path`` and return the changes against the previous snapshot."""
    current = status.to_dict()
    previous = load_state(path)
    changes: list[str] = []
    if previous is not None:
        changes = diff_state(previous, current)
        for line in changes:
            logger.info("state changed: %s", line)
        if not changes:
            logger.info("lifecycle state unchanged since the last run")

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(current, indent=2, sort_keys=True) + "\n", encoding="utf-8")
    except OSError as e:
        raise ChartsFilesystemError(f"unable to write state file {path}: {e}") from e
    return changes


def _format_diff(diff: DeepDiff) -> list[str]:
    details: list[str] = []

    if "values_changed" in diff:
        for path, change in diff["values_changed"].items():
            old = change.get("old_value", "?")
            new = change.get("new_value", "?")
            details.append(f"Changed {path}: {old!r} -> {new!r}")

    if "dictionary_item_added" in diff:
        for path in diff["dictionary_item_added"]:
            details.append(f"Added: {path}")

    if "dictionary_item_removed" in diff:
        for path in diff["dictionary_item_removed"]:
            details.append(f"Removed: {path}")

    if "iterable_item_added" in diff:
        for path, value in diff["iterable_item_added"].items():
            details.append(f"Version added {path}: {value}")

    if "iterable_item_removed" in diff:
        for path, value in diff["iterable_item_removed"].items():
            details.append(f"Version removed {path}: {value}")

    if "type_changes" in diff:
        for path in diff["type_changes"]:
            details.append(f"Type changed: {path}")

    return details
