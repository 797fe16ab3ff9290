"""Configuration and catalog loaders from YAML."""

from pathlib import Path
from typing import Any, Dict, Union

import yaml

from .catalog import ItemCatalog, SpeciesCatalog
from .schema import Config

CONFIG_DIR = Path(__file__).parent
DEFAULT_CONFIG_PATH = CONFIG_DIR / "defaults.yaml"
DEFAULT_SPECIES_PATH = CONFIG_DIR / "species.yaml"
DEFAULT_ITEMS_PATH = CONFIG_DIR / "items.yaml"

PathLike = Union[str, Path]


def _read_yaml(path: PathLike) -> Dict[str, Any]:
    with open(path, 'r') as f:
        return yaml.safe_load(f) or {}


def load_config(yaml_path: PathLike = None) -> Config:
    """
    Load configuration from YAML file.

    Args:
        yaml_path: Path to YAML file (defaults to defaults.yaml)

    Returns:
        Config object
    """
    return Config.from_dict(_read_yaml(yaml_path or DEFAULT_CONFIG_PATH))


def config_from_dict(data: Dict[str, Any]) -> Config:
    """
    Create config from dictionary, filling missing sections from the defaults.

    Args:
        data: Configuration dictionary (may be partial)

    Returns:
        Config object
    """
    merged = _read_yaml(DEFAULT_CONFIG_PATH)
    for key, value in (data or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = {**merged[key], **value}
        else:
            merged[key] = value
    return Config.from_dict(merged)


def load_species_catalog(yaml_path: PathLike = None) -> SpeciesCatalog:
    """Load the species economy catalog (defaults to species.yaml)."""
    data = _read_yaml(yaml_path or DEFAULT_SPECIES_PATH)
    return SpeciesCatalog.from_dict(data.get("species", {}))


def load_item_catalog(yaml_path: PathLike = None) -> ItemCatalog:
    """Load the tagged shop item catalog (defaults to items.yaml)."""
    data = _read_yaml(yaml_path or DEFAULT_ITEMS_PATH)
    return ItemCatalog.from_dict(data.get("items", {}))
