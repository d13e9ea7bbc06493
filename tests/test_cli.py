from __future__ import annotations

import io
import tarfile
from pathlib import Path

import pytest
from typer.testing import CliRunner

from charts_build.cli.app import app
from charts_build.cli.commands import lifecycle_cmd
from charts_build.models.lifecycle import Status
from tests.helpers import assets, write_chart

runner = CliRunner()


def write_release_tgz(repo_root: Path, tag: str) -> None:
    (repo_root / "release.yaml").write_text("nginx:\n- 1.2.0\n", encoding="utf-8")
    path = repo_root / "assets" / "nginx" / "nginx-1.2.0.tgz"
    path.parent.mkdir(parents=True)
    data = f"image:\n  repository: rancher/nginx\n  tag: {tag}\n".encode("utf-8")
    with tarfile.open(path, "w:gz") as tar:
        info = tarfile.TarInfo("nginx/values.yaml")
        info.size = len(data)
        tar.addfile(info, io.BytesIO(data))


def test_help_lists_commands() -> None:
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    for name in ("patch", "prepare", "generate-patch", "standardize", "lifecycle-status", "check-rc-tags"):
        assert name in result.output


def test_standardize(tmp_path: Path) -> None:
    root = tmp_path / "elsewhere"
    write_chart(root / "charts" / "nginx")
    result = runner.invoke(app, ["--root", str(root), "standardize", "charts/nginx"])
    assert result.exit_code == 0, result.output
    assert "Standardized" in result.output
    assert (root / "charts" / "nginx" / "Chart.yaml").read_text(encoding="utf-8").startswith("name: nginx\n")


def test_standardize_missing_chart(repo_root: Path) -> None:
    result = runner.invoke(app, ["standardize", "charts/missing"])
    assert result.exit_code == 1
    assert "Error" in result.output


def test_check_rc_tags_found(repo_root: Path) -> None:
    write_release_tgz(repo_root, "1.25.0-rc1")
    result = runner.invoke(app, ["check-rc-tags", "-o", "json"])
    assert result.exit_code == 1
    assert "1.25.0-rc1" in result.output


def test_check_rc_tags_clean(repo_root: Path) -> None:
    write_release_tgz(repo_root, "1.25.0")
    result = runner.invoke(app, ["check-rc-tags"])
    assert result.exit_code == 0, result.output
    assert "No RC tags found." in result.output


def test_prepare_unknown_package(repo_root: Path) -> None:
    result = runner.invoke(app, ["prepare", "nope"])
    assert result.exit_code == 1
    assert "nope" in result.output


def test_lifecycle_status_json(repo_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    seen: dict = {}

    class FakeReporter:
        def __init__(self, repo_dir: Path):
            seen["repo_dir"] = repo_dir
            self.logs_dir = repo_dir / "logs"

        def check_and_save(self, chart: str = "") -> Status:
            seen["chart"] = chart
            return Status(to_be_released=assets({"nginx": ["104.1.0"]}))

    monkeypatch.setattr(lifecycle_cmd, "StatusReporter", FakeReporter)
    result = runner.invoke(app, ["lifecycle-status", "--chart", "nginx", "-o", "json"])
    assert result.exit_code == 0, result.output
    assert seen == {"repo_dir": repo_root, "chart": "nginx"}
    assert "104.1.0" in result.output


def test_lifecycle_status_missing_rules(repo_root: Path) -> None:
    result = runner.invoke(app, ["lifecycle-status"])
    assert result.exit_code == 1
    assert "version-rules.yaml" in result.output
