from __future__ import annotations

from pathlib import Path

import pytest

from charts_build.core.version_rules import VersionRules
from charts_build.errors import ConfigError, PolicyEvaluationError


def test_window_spans_kept_branch_lines(rules: VersionRules) -> None:
    assert str(rules.min_version) == "102.0.0"
    assert str(rules.max_version) == "105.0.0"

    assert rules.in_lifecycle("102.0.0+up1.0.0")
    assert rules.in_lifecycle("104.2.1+up3.4.5")
    assert not rules.in_lifecycle("101.9.9")
    assert not rules.in_lifecycle("105.0.0")
    assert not rules.in_lifecycle("not-a-version")


def test_release_only_current_line(rules: VersionRules) -> None:
    assert rules.should_release("104.0.0+up1.0.0")
    assert rules.should_release("v104.1.0")
    assert not rules.should_release("103.5.0")
    assert not rules.should_release("105.0.0")


def test_release_decision_rejects_malformed_versions(rules: VersionRules) -> None:
    with pytest.raises(PolicyEvaluationError):
        rules.should_release("latest")


def test_release_candidate_marker(rules: VersionRules) -> None:
    assert rules.is_release_candidate("104.0.0+up1.2.3-rc1")
    assert not rules.is_release_candidate("1.3.0-RC2")
    assert not rules.is_release_candidate("104.0.0+up1.2.3")


@pytest.mark.parametrize("version", ["104.0.1-hotfix1", "104.0.1-security.1", "104.0.1-alpha.1", "103.2.0-0.3.7+up1.0.0"])
def test_semver_prereleases_are_in_window(rules: VersionRules, version: str) -> None:
    assert rules.in_lifecycle(version)


def test_semver_prerelease_ordering(rules: VersionRules) -> None:
    # a pre-release sorts before its release, so 105.0.0-rc1 is still inside
    assert rules.in_lifecycle("105.0.0-rc1")
    assert not rules.in_lifecycle("102.0.0-hotfix1")
    assert rules.should_release("104.0.1-security.1")
    assert not rules.should_release("104.0.0-beta")


def test_short_versions_are_padded(rules: VersionRules) -> None:
    assert rules.in_lifecycle("104")
    assert rules.should_release("v104.1")


def test_lifecycle_lines_clamp_to_oldest_rule(rules: VersionRules) -> None:
    rules.lifecycle_lines = 10
    assert str(rules.min_version) == "101.0.0"
    rules.lifecycle_lines = 0
    assert str(rules.min_version) == "104.0.0"


def test_load_from_yaml(tmp_path: Path) -> None:
    path = tmp_path / "version-rules.yaml"
    path.write_text(
        "branch-version: '2.10'\n"
        "prod-branch: release-v2.10\n"
        "dev-branch: dev-v2.10\n"
        "lifecycle-lines: 1\n"
        "rules:\n"
        "  '2.9': {min: 104.0.0, max: 105.0.0}\n"
        "  '2.10': {min: 105.0.0, max: 106.0.0}\n",
        encoding="utf-8",
    )
    rules = VersionRules.load(path)
    assert rules.prod_branch == "release-v2.10"
    # 2.10 sorts after 2.9 as a version, not as a string
    assert str(rules.min_version) == "104.0.0"
    assert str(rules.max_version) == "106.0.0"


@pytest.mark.parametrize(
    "data",
    [
        {"prod-branch": "p", "dev-branch": "d", "rules": {}},
        {"branch-version": "2.9", "prod-branch": "p", "dev-branch": "d", "rules": {"2.8": {"min": "1.0.0", "max": "2.0.0"}}},
        {"branch-version": "2.9", "prod-branch": "p", "dev-branch": "d", "rules": {"2.9": {"min": "1.0.0"}}},
        {"branch-version": "2.9", "prod-branch": "p", "dev-branch": "d", "rules": {"2.9": {"min": "x", "max": "y"}}},
    ],
)
def test_invalid_rules_raise_config_error(data: dict) -> None:
    with pytest.raises(ConfigError):
        VersionRules.from_dict(data)


def test_missing_rules_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        VersionRules.load(tmp_path / "missing.yaml")
