"""YAML file helpers."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from charts_build.errors import ConfigError

logger = logging.getLogger(__name__)

# Prefer the C-accelerated YAML loader when available (~10x faster).
YamlLoader = getattr(yaml, "CSafeLoader", yaml.SafeLoader)


def load_yaml(path: Path) -> Any:
    """Load a YAML file, raising ConfigError if it is missing or invalid."""
    if not path.exists():
        raise ConfigError(f"{path} does not exist")
    try:
        return yaml.load(path.read_text(encoding="utf-8"), Loader=YamlLoader)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"unable to parse {path}: {e}") from e


def load_yaml_mapping(path: Path) -> dict:
    data = load_yaml(path)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a YAML mapping, got {type(data).__name__}")
    return data


def dump_yaml(data: Any) -> str:
    return yaml.safe_dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True)
