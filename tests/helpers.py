from __future__ import annotations

import shutil
import subprocess
from pathlib import Path

import pytest
import yaml

from charts_build.models.asset import Asset, AssetsMap


def _is_gnu(tool: str) -> bool:
    path = shutil.which(tool)
    if path is None:
        return False
    proc = subprocess.run([path, "--version"], text=True, capture_output=True, check=False)
    return "GNU" in proc.stdout


requires_gnu_tools = pytest.mark.skipif(
    not (_is_gnu("diff") and _is_gnu("patch")),
    reason="GNU diff and patch are required",
)

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git is required")


def assets(mapping: dict[str, list[str]]) -> AssetsMap:
    return {chart: [Asset(name=chart, version=v) for v in versions] for chart, versions in mapping.items()}


def write_index(path: Path, mapping: dict[str, list[str]]) -> None:
    entries = {
        chart: [{"name": chart, "version": v, "digest": f"sha-{chart}-{v}"} for v in versions]
        for chart, versions in mapping.items()
    }
    path.write_text(yaml.safe_dump({"apiVersion": "v1", "entries": entries}), encoding="utf-8")


def write_chart(chart_dir: Path, name: str = "nginx", version: str = "1.2.0", **extra: object) -> None:
    chart_dir.mkdir(parents=True, exist_ok=True)
    data = {"version": version, "name": name, "apiVersion": "v2", **extra}
    (chart_dir / "Chart.yaml").write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
    (chart_dir / "values.yaml").write_text("replicaCount: 1\nimage:\n  repository: nginx\n  tag: 1.25.0\n", encoding="utf-8")


class FakePolicy:
    """Window: version >= min_major; releases everything that is not an RC."""

    def __init__(self, min_major: int = 1, fail_on: str = ""):
        self.min_major = min_major
        self.fail_on = fail_on

    def in_lifecycle(self, version: str) -> bool:
        return int(version.split(".")[0]) >= self.min_major

    def should_release(self, version: str) -> bool:
        from charts_build.errors import PolicyEvaluationError

        if version == self.fail_on:
            raise PolicyEvaluationError(f"invalid chart version {version!r}")
        return "-rc" not in version

    def is_release_candidate(self, version: str) -> bool:
        return "-rc" in version
