from __future__ import annotations

import logging
from pathlib import Path

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .model import PipelineConfig
from ..errors import ConfigError
from ..paths import config_path

_yaml = YAML(typ="safe")

logger = logging.getLogger(__name__)


def _read_yaml_map(path: Path) -> dict:
    """Read a YAML file and return a mapping."""
    if not path.is_file():
        return {}
    try:
        raw = _yaml.load(path.read_text(encoding="utf-8")) or {}
    except YAMLError as e:
        raise ConfigError(f"Failed to parse {path}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"YAML must be a mapping: {path}")
    return raw


def load_config(root: Path) -> PipelineConfig:
    """
    Load assetpipe.yaml from the project root.

    A missing file yields the default configuration.
    """
    path = config_path(root)
    if not path.is_file():
        logger.debug(f"No {path.name} in {root}, using defaults")
    return PipelineConfig.from_dict(_read_yaml_map(path))


__all__ = ["load_config"]
