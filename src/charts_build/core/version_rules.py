"""Lifecycle window rules loaded from version-rules.yaml; chart versions compare as SemVer.

Example::

    branch-version: "2.9"
    prod-branch: release-v2.9
    dev-branch: dev-v2.9
    lifecycle-lines: 2
    rules:
      "2.9": {min: "104.0.0", max: "105.0.0"}
      "2.8": {min: "103.0.0", max: "104.0.0"}
      "2.7": {min: "102.0.0", max: "103.0.0"}

A chart version is inside the lifecycle when it falls between the ``min`` of
the oldest kept branch line and the ``max`` of the current one. Versions of
the current branch line are released; older in-lifecycle versions are
forward-ported.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

import semver
from packaging.version import Version

from charts_build.config.settings import settings
from charts_build.errors import ConfigError, PolicyEvaluationError
from charts_build.utils.version_compare import in_range, is_release_candidate, parse_branch_line, parse_version
from charts_build.utils.yaml_io import load_yaml_mapping

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VersionRange:
    min: semver.Version
    max: semver.Version


@dataclass
class VersionRules:
    branch_version: str
    prod_branch: str
    dev_branch: str
    rules: dict[str, VersionRange] = field(default_factory=dict)
    lifecycle_lines: int = 2

    def __post_init__(self) -> None:
        if self.branch_version not in self.rules:
            raise ConfigError(f"no rule defined for branch version {self.branch_version}")
        if self.lifecycle_lines < 0:
            raise ConfigError("lifecycle-lines must not be negative")

    @classmethod
    def from_dict(cls, d: dict) -> VersionRules:
        for key in ("branch-version", "prod-branch", "dev-branch", "rules"):
            if key not in d:
                raise ConfigError(f"version rules are missing '{key}'")
        raw_rules = d["rules"]
        if not isinstance(raw_rules, dict):
            raise ConfigError("'rules' must be a mapping of branch version to {min, max}")

        rules: dict[str, VersionRange] = {}
        for line, bounds in raw_rules.items():
            try:
                lower = parse_version(str(bounds["min"]))
                upper = parse_version(str(bounds["max"]))
            except (KeyError, TypeError) as e:
                raise ConfigError(f"rule for {line} needs 'min' and 'max'") from e
            if lower is None or upper is None:
                raise ConfigError(f"rule for {line} has an invalid version bound")
            rules[str(line)] = VersionRange(min=lower, max=upper)

        try:
            lifecycle_lines = int(d.get("lifecycle-lines", 2))
        except (TypeError, ValueError) as e:
            raise ConfigError("lifecycle-lines must be an integer") from e

        return cls(
            branch_version=str(d["branch-version"]),
            prod_branch=str(d["prod-branch"]),
            dev_branch=str(d["dev-branch"]),
            rules=rules,
            lifecycle_lines=lifecycle_lines,
        )

    @classmethod
    def load(cls, path: Path | None = None) -> VersionRules:
        path = path or settings.version_rules_file
        logger.debug("loading version rules from %s", path)
        return cls.from_dict(load_yaml_mapping(path))

    def _sorted_lines(self) -> list[str]:
        def key(line: str):
            parsed = parse_branch_line(line)
            return (parsed is None, parsed or Version("0"), line)

        return sorted(self.rules, key=key)

    @property
    def current_range(self) -> VersionRange:
        return self.rules[self.branch_version]

    @property
    def min_version(self) -> semver.Version:
        lines = self._sorted_lines()
        idx = lines.index(self.branch_version)
        oldest = lines[max(0, idx - self.lifecycle_lines)]
        return self.rules[oldest].min

    @property
    def max_version(self) -> semver.Version:
        return self.current_range.max

    def in_lifecycle(self, version: str) -> bool:
        parsed = parse_version(version)
        if parsed is None:
            logger.debug("version %r cannot be parsed, treating it as out of the lifecycle", version)
            return False
        return in_range(parsed, self.min_version, self.max_version)

    def should_release(self, version: str) -> bool:
        parsed = parse_version(version)
        if parsed is None:
            raise PolicyEvaluationError(f"invalid chart version {version!r}")
        return in_range(parsed, self.current_range.min, self.current_range.max)

    def is_release_candidate(self, version: str) -> bool:
        return is_release_candidate(version)
