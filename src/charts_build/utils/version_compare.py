"""Chart version parsing utilities."""

from __future__ import annotations

import semver
from packaging.version import InvalidVersion, Version


def parse_version(v: str) -> semver.Version | None:
    """Parse a SemVer 2 chart version string, returning None on failure.

    Build metadata (``+up1.2.3``) is ignored, a leading ``v`` is tolerated and
    a missing minor or patch counts as zero.
    """
    core = v.strip().split("+", 1)[0]
    if core.startswith("v"):
        core = core[1:]
    if not core:
        return None
    try:
        return semver.Version.parse(core, optional_minor_and_patch=True)
    except ValueError:
        return None


def parse_branch_line(line: str) -> Version | None:
    """Parse a release line such as ``2.9`` or ``2.10``; these are not SemVer."""
    try:
        return Version(line)
    except InvalidVersion:
        return None


def is_release_candidate(v: str) -> bool:
    return "-rc" in v


def in_range(v: semver.Version, lower: semver.Version | None, upper: semver.Version | None) -> bool:
    """True if ``lower <= v < upper``; a missing bound is unbounded."""
    if lower is not None and v < lower:
        return False
    if upper is not None and v >= upper:
        return False
    return True
