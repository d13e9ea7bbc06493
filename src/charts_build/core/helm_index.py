"""Read a Helm repository index.yaml into an assets map."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from charts_build.errors import ChartsFilesystemError
from charts_build.models.asset import Asset, AssetsMap
from charts_build.utils.yaml_io import YamlLoader

logger = logging.getLogger(__name__)


def read_index(index_path: Path, chart: str = "") -> AssetsMap:
    """Map every chart in the index to its version records.

    When ``chart`` is given only that chart is returned. A missing index is
    an error; an index without entries is an empty map.
    """
    if not index_path.exists():
        raise ChartsFilesystemError(f"Helm index {index_path} does not exist")
    try:
        data = yaml.load(index_path.read_text(encoding="utf-8"), Loader=YamlLoader)
    except (OSError, yaml.YAMLError) as e:
        raise ChartsFilesystemError(f"unable to read Helm index {index_path}: {e}") from e

    entries = (data or {}).get("entries") or {}
    assets: AssetsMap = {}
    for chart_name, chart_entries in entries.items():
        if chart and chart_name != chart:
            continue
        assets[chart_name] = [
            Asset.from_dict(chart_name, e)
            for e in chart_entries or []
            if "version" in e
        ]
    logger.debug("read %d charts from %s", len(assets), index_path)
    return assets
