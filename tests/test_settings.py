from __future__ import annotations

from pathlib import Path

import pytest

from charts_build.config.settings import Settings, settings
from charts_build.core.rc_tags import load_release_options
from charts_build.core.version_rules import VersionRules
from charts_build.errors import ConfigError


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("CHARTS_BUILD_ROOT", str(tmp_path))
    monkeypatch.setenv("CHARTS_BUILD_REMOTE", "upstream")
    monkeypatch.delenv("CHARTS_BUILD_DIFF", raising=False)

    s = Settings()
    assert s.repo_root == tmp_path
    assert s.git_remote == "upstream"
    assert s.diff_command == "diff"


def test_layout_paths_follow_repo_root(repo_root: Path) -> None:
    assert settings.packages_dir == repo_root / "packages"
    assert settings.release_options_file == repo_root / "release.yaml"
    assert settings.version_rules_file == repo_root / "version-rules.yaml"


def test_default_config_files_are_read_from_repo_root(repo_root: Path) -> None:
    (repo_root / "release.yaml").write_text("nginx:\n- 1.2.0\n", encoding="utf-8")
    assert load_release_options() == {"nginx": ["1.2.0"]}

    with pytest.raises(ConfigError, match="version-rules.yaml"):
        VersionRules.load()
