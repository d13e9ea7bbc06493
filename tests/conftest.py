from __future__ import annotations

from pathlib import Path

import pytest

from charts_build.config.settings import settings
from charts_build.core.version_rules import VersionRules


@pytest.fixture(autouse=True)
def repo_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the global settings at an empty repository for every test."""
    root = tmp_path / "repo"
    root.mkdir()
    monkeypatch.setattr(settings, "repo_root", root)
    return root


@pytest.fixture
def rules() -> VersionRules:
    return VersionRules.from_dict({
        "branch-version": "2.9",
        "prod-branch": "release-v2.9",
        "dev-branch": "dev-v2.9",
        "lifecycle-lines": 2,
        "rules": {
            "2.6": {"min": "101.0.0", "max": "102.0.0"},
            "2.7": {"min": "102.0.0", "max": "103.0.0"},
            "2.8": {"min": "103.0.0", "max": "104.0.0"},
            "2.9": {"min": "104.0.0", "max": "105.0.0"},
        },
    })
