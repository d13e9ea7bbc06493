from __future__ import annotations

import io
import tarfile
from pathlib import Path

import pytest
import yaml

from charts_build.core.rc_tags import (
    chart_name_and_version,
    check_rc_tags,
    collect_image_tags,
    walk_map,
)
from charts_build.errors import ChartsFilesystemError


def write_tgz(path: Path, chart: str, files: dict[str, str]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with tarfile.open(path, "w:gz") as tar:
        for name, content in files.items():
            data = content.encode("utf-8")
            info = tarfile.TarInfo(f"{chart}/{name}")
            info.size = len(data)
            tar.addfile(info, io.BytesIO(data))


def values(**images: str) -> str:
    """values.yaml with one ``{repository, tag}`` block per ``key="repo:tag"``."""
    doc: dict = {"replicaCount": 1}
    for key, ref in images.items():
        repository, tag = ref.split(":", 1)
        doc[key] = {"repository": repository, "tag": tag}
    return yaml.safe_dump(doc)


@pytest.mark.parametrize(
    "filename, expected",
    [
        ("nginx-1.2.0.tgz", ("nginx", "1.2.0")),
        ("rancher-monitoring-crd-102.0.0+up40.1.2.tgz", ("rancher-monitoring-crd", "102.0.0+up40.1.2")),
        ("k3s-v2-1.0.0-rc1.tgz", ("k3s-v2", "1.0.0-rc1")),
    ],
)
def test_chart_name_and_version(filename: str, expected: tuple[str, str]) -> None:
    assert chart_name_and_version(filename) == expected


@pytest.mark.parametrize("filename", ["nginx.tgz", "nginx-latest.tgz", "nginx-1.2.0.tar"])
def test_chart_name_and_version_rejects(filename: str) -> None:
    with pytest.raises(ValueError):
        chart_name_and_version(filename)


def test_walk_map_visits_nested_mappings() -> None:
    seen: list[str] = []
    walk_map(
        {"a": {"repository": "x"}, "b": [{"repository": "y"}, "plain"], "c": 1},
        lambda m: seen.append(m.get("repository", "root")),
    )
    assert seen == ["root", "x", "y"]


def test_collect_only_released_versions(tmp_path: Path) -> None:
    assets = tmp_path / "assets"
    write_tgz(assets / "nginx" / "nginx-1.2.0.tgz", "nginx", {
        "values.yaml": values(image="rancher/nginx:1.25.0-rc2", sidecar="rancher/shell:v0.1.0"),
        "charts/sub/values.yaml": values(image="rancher/sub:2.0.0"),
        "Chart.yaml": "name: nginx\nversion: 1.2.0\n",
    })
    write_tgz(assets / "nginx" / "nginx-1.1.0.tgz", "nginx", {
        "values.yaml": values(image="rancher/old:0.1.0-rc1"),
    })

    tags = collect_image_tags(assets, {"nginx": ["1.2.0"]})
    assert tags == {
        "rancher/nginx": ["1.25.0-rc2"],
        "rancher/shell": ["v0.1.0"],
        "rancher/sub": ["2.0.0"],
    }


def test_float_tags_and_ignores(tmp_path: Path) -> None:
    assets = tmp_path / "assets"
    write_tgz(assets / "redis-3.0.0.tgz", "redis", {
        "values.yaml": "image:\n  repository: rancher/redis\n  tag: 7.2\nexporter:\n  repository: rancher/exp\n  tag: 1.0-rc1\n",
    })
    tags = collect_image_tags(assets, {"redis": ["3.0.0"]}, ignore_tags={"redis": "1.0-rc1"})
    assert tags == {"rancher/redis": ["7.2"]}


def test_errors_are_aggregated(tmp_path: Path) -> None:
    assets = tmp_path / "assets"
    assets.mkdir()
    (assets / "broken-1.0.0.tgz").write_bytes(b"not a tarball")
    (assets / "noversion.tgz").write_bytes(b"")
    with pytest.raises(ChartsFilesystemError) as excinfo:
        collect_image_tags(assets, {"broken": ["1.0.0"]})
    assert "broken-1.0.0.tgz" in str(excinfo.value)
    assert "noversion.tgz" in str(excinfo.value)


def test_check_rc_tags(repo_root: Path) -> None:
    (repo_root / "release.yaml").write_text("nginx:\n- 1.2.0\nredis:\n- 3.0.0\n", encoding="utf-8")
    write_tgz(repo_root / "assets" / "nginx" / "nginx-1.2.0.tgz", "nginx", {
        "values.yaml": values(image="rancher/nginx:1.25.0-rc2", other="rancher/shell:v0.1.0"),
    })
    write_tgz(repo_root / "assets" / "redis" / "redis-3.0.0.tgz", "redis", {
        "values.yaml": values(image="rancher/redis:7.2.0-rc1", exporter="rancher/exporter:1.0.0-RC1"),
    })

    assert check_rc_tags() == {
        "rancher/nginx": ["1.25.0-rc2"],
        "rancher/redis": ["7.2.0-rc1"],
    }


def test_check_rc_tags_none_found(repo_root: Path) -> None:
    (repo_root / "release.yaml").write_text("nginx:\n- 1.2.0\n", encoding="utf-8")
    write_tgz(repo_root / "assets" / "nginx-1.2.0.tgz", "nginx", {"values.yaml": values(image="rancher/nginx:1.25.0")})
    assert check_rc_tags(repo_root) == {}
