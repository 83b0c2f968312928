"""3-layer configuration system for eaacheck.

Loads and merges configuration from:
1. Default settings (built-in)
2. Project config (.eaacheck/config.yaml)
3. CLI parameters (override)
"""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Optional

import yaml

CONFIG_DIR = ".eaacheck"

DEFAULT_CONFIG: dict = {
    "project": {
        "name": "",
    },
    "checklist": {
        "path": None,
    },
    "mapping": {
        "path": None,
    },
    "scoring": {
        "weights": {"HIGH": 3, "MEDIUM": 2, "LOW": 1},
    },
    "output": {
        "format": "markdown",
        "directory": f"{CONFIG_DIR}/reports",
    },
    "ci": {
        "fail_under": 0,
        "exit_codes": {"pass": 0, "fail": 1, "error": 3},
    },
}


def deep_merge(base: dict, override: dict) -> dict:
    """Deep merge two dicts. Arrays are replaced, not merged."""
    result = {}
    for key in base:
        result[key] = base[key]
    for key, value in override.items():
        base_value = result.get(key)
        if isinstance(base_value, dict) and isinstance(value, dict):
            result[key] = deep_merge(base_value, value)
        else:
            result[key] = value
    return result


def load_project_config(project_path: Path) -> dict:
    """Load project configuration from .eaacheck/config.yaml."""
    config_path = project_path / CONFIG_DIR / "config.yaml"
    if not config_path.exists():
        return {}
    try:
        content = config_path.read_text(encoding="utf-8-sig")  # utf-8-sig strips BOM
        data = yaml.safe_load(content)
    except (OSError, yaml.YAMLError):
        return {}
    return data if isinstance(data, dict) else {}


def resolve_path(config: dict, value: Optional[str]) -> Optional[Path]:
    """Resolve a configured path relative to the project root."""
    if not value:
        return None
    path = Path(value)
    if path.is_absolute():
        return path
    return Path(config.get("_project_path", ".")) / path


def get_effective_config(
    project_path: Path,
    cli_overrides: Optional[dict] = None,
) -> dict:
    """Get the fully resolved configuration for a run."""
    config = copy.deepcopy(DEFAULT_CONFIG)

    project_config = load_project_config(project_path)
    if project_config:
        config = deep_merge(config, project_config)

    if cli_overrides:
        config = deep_merge(config, cli_overrides)

    config["_project_path"] = str(project_path)

    return config
