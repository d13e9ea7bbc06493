"""Read and standardize a chart's Chart.yaml."""

from __future__ import annotations

import logging
from pathlib import Path

from charts_build.errors import ChartsFilesystemError, ConfigError
from charts_build.models.chart import ChartMetadata
from charts_build.utils.yaml_io import dump_yaml, load_yaml_mapping

logger = logging.getLogger(__name__)

CHART_FILE = "Chart.yaml"


def chart_file(chart_dir: Path) -> Path:
    path = chart_dir / CHART_FILE
    if not path.exists():
        raise ChartsFilesystemError(f"no {CHART_FILE} found in {chart_dir}")
    return path


def load_chart_metadata(chart_dir: Path) -> ChartMetadata:
    path = chart_file(chart_dir)
    try:
        return ChartMetadata.from_dict(load_yaml_mapping(path))
    except ConfigError as e:
        raise ChartsFilesystemError(str(e)) from e


def standardize_chart_yaml(chart_dir: Path) -> bool:
    """Rewrite Chart.yaml in Helm's canonical key order.

    Returns True if the file changed.
    """
    path = chart_file(chart_dir)
    metadata = load_chart_metadata(chart_dir)
    canonical = dump_yaml(metadata.to_dict())
    current = path.read_text(encoding="utf-8")
    if current == canonical:
        logger.debug("%s already standardized", path)
        return False
    path.write_text(canonical, encoding="utf-8")
    logger.info("standardized %s", path)
    return True


def get_chart_version(chart_dir: Path) -> str:
    version = load_chart_metadata(chart_dir).version
    if not version:
        raise ChartsFilesystemError(f"{chart_dir / CHART_FILE} does not declare a version")
    return version
