"""Configuration loading utilities."""

from pathlib import Path
from typing import Any

import yaml

CONFIG_DIR = Path(__file__).parent


def load_yaml_config(filename: str, section: str | None = None) -> dict[str, Any]:
    """Load a YAML config file from the config/ directory.

    Args:
        filename: File name relative to config/, e.g. "salary_finder.yaml".
        section: Optional top-level key to return instead of the whole document.

    Raises:
        KeyError: If ``section`` is given but missing from the file.
    """
    with open(CONFIG_DIR / filename) as f:
        data = yaml.safe_load(f) or {}
    if section is None:
        return data
    return data[section]
