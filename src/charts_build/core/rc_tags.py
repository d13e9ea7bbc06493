"""Find container images referenced with release-candidate tags in packaged charts."""

from __future__ import annotations

import logging
import tarfile
from pathlib import Path
from typing import Any, Callable

import yaml

from charts_build.config.settings import ASSETS_DIR, RELEASE_OPTIONS_FILE, settings
from charts_build.errors import ChartsFilesystemError, ConfigError
from charts_build.utils.version_compare import is_release_candidate
from charts_build.utils.yaml_io import YamlLoader, load_yaml_mapping

logger = logging.getLogger(__name__)

VALUES_FILES = ("values.yaml", "values.yml")

ImageTagMap = dict[str, list[str]]


def load_release_options(path: Path | None = None) -> dict[str, list[str]]:
    """Load release.yaml: {chart: [versions to release]}."""
    data = load_yaml_mapping(path or settings.release_options_file)
    options: dict[str, list[str]] = {}
    for chart, versions in data.items():
        if not isinstance(versions, list):
            raise ConfigError(f"release options for {chart} must be a list of versions")
        options[str(chart)] = [str(v) for v in versions]
    return options


def chart_name_and_version(filename: str) -> tuple[str, str]:
    """Split ``<chart>-<version>.tgz`` at the first dash followed by a digit."""
    if not filename.endswith(".tgz"):
        raise ValueError(f"{filename} does not have a .tgz suffix")
    stem = filename[: -len(".tgz")]
    for i in range(len(stem) - 1):
        if stem[i] == "-" and stem[i + 1].isdigit():
            return stem[:i], stem[i + 1:]
    raise ValueError(f"could not extract chart name and version from {filename}")


def values_from_tgz(path: Path) -> list[Any]:
    """Parse every values.yaml/values.yml packaged in a chart archive."""
    documents: list[Any] = []
    with tarfile.open(path, "r:gz") as tar:
        for member in tar.getmembers():
            if not member.isfile() or Path(member.name).name not in VALUES_FILES:
                continue
            f = tar.extractfile(member)
            if f is None:
                continue
            with f:
                documents.append(yaml.load(f.read().decode("utf-8"), Loader=YamlLoader))
    return documents


def walk_map(node: Any, callback: Callable[[dict], None]) -> None:
    """Call ``callback`` on every mapping in ``node``, the root included."""
    if isinstance(node, dict):
        callback(node)
        for value in node.values():
            walk_map(value, callback)
    elif isinstance(node, list):
        for item in node:
            walk_map(item, callback)


def _format_tag(tag: Any) -> str:
    # some charts use float-typed tags (e.g. 1.2)
    return tag if isinstance(tag, str) else str(tag)


def collect_image_tags(
    assets_dir: Path,
    release_options: dict[str, list[str]],
    ignore_tags: dict[str, str] | None = None,
) -> ImageTagMap:
    """Map image repositories to the tags used by the charts listed in ``release_options``."""
    ignore_tags = ignore_tags or {}
    image_tags: ImageTagMap = {}
    errors: dict[str, str] = {}

    for tgz in sorted(assets_dir.rglob("*.tgz")):
        try:
            chart, version = chart_name_and_version(tgz.name)
        except ValueError as e:
            errors[tgz.name] = str(e)
            continue
        if version not in release_options.get(chart, []):
            continue
        try:
            documents = values_from_tgz(tgz)
        except (OSError, tarfile.TarError, yaml.YAMLError, UnicodeDecodeError) as e:
            errors[tgz.name] = str(e)
            continue

        logger.info("collecting images and tags for %s %s", chart, version)
        ignored = ignore_tags.get(chart)

        def collect(mapping: dict) -> None:
            repository = mapping.get("repository")
            if not isinstance(repository, str) or "tag" not in mapping:
                return
            tag = _format_tag(mapping["tag"])
            if ignored is not None and tag == ignored:
                return
            tags = image_tags.setdefault(repository, [])
            if tag not in tags:
                tags.append(tag)

        for document in documents:
            walk_map(document, collect)

    if errors:
        raise ChartsFilesystemError(f"error occurred while walking over the assets directory: {errors}")
    return image_tags


def check_rc_tags(repo_root: Path | None = None, ignore_tags: dict[str, str] | None = None) -> ImageTagMap:
    """Return {image: [rc tags]} for every chart version about to be released."""
    root = repo_root or settings.repo_root
    release_options = load_release_options(root / RELEASE_OPTIONS_FILE)
    logger.info("checking for RC tags in %d charts", len(release_options))

    image_tags = collect_image_tags(root / ASSETS_DIR, release_options, ignore_tags)
    rc_tags: ImageTagMap = {}
    for image, tags in image_tags.items():
        for tag in tags:
            if is_release_candidate(tag):
                rc_tags.setdefault(image, []).append(tag)
    return rc_tags
