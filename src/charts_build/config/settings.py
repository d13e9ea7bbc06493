"""Application configuration and repository layout defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

# Repository layout, relative to the repository root
ASSETS_DIR = "assets"
PACKAGES_DIR = "packages"
GENERATED_CHANGES_DIR = "generated-changes"
PATCH_DIR = "patch"
LOGS_DIR = "logs"
HELM_INDEX_FILE = "index.yaml"
RELEASE_OPTIONS_FILE = "release.yaml"
VERSION_RULES_FILE = "version-rules.yaml"
PACKAGE_OPTIONS_FILE = "package.yaml"
STATE_FILE = "state.json"


def _default_repo_root() -> Path:
    """Return the repository root.

    CHARTS_BUILD_ROOT wins over the current working directory.
    """
    root = os.environ.get("CHARTS_BUILD_ROOT", "")
    if root:
        return Path(root)
    return Path.cwd()


def _env(name: str, default: str) -> str:
    return os.environ.get(name, "") or default


@dataclass
class Settings:
    repo_root: Path = field(default_factory=_default_repo_root)
    git_remote: str = field(default_factory=lambda: _env("CHARTS_BUILD_REMOTE", "origin"))
    diff_command: str = field(default_factory=lambda: _env("CHARTS_BUILD_DIFF", "diff"))
    patch_command: str = field(default_factory=lambda: _env("CHARTS_BUILD_PATCH", "patch"))

    @property
    def packages_dir(self) -> Path:
        return self.repo_root / PACKAGES_DIR

    @property
    def release_options_file(self) -> Path:
        return self.repo_root / RELEASE_OPTIONS_FILE

    @property
    def version_rules_file(self) -> Path:
        return self.repo_root / VERSION_RULES_FILE


# Global singleton
settings = Settings()
