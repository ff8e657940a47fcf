"""Helpers to resolve and load the repository configuration file."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml

REPO_ROOT = Path(__file__).resolve().parents[1]

CONFIG_ENV_VAR = "MACRO_REPORT_CONFIG_PATH"


def get_config_path(default: Path | None = None) -> Path:
    """Return the configuration path, honouring MACRO_REPORT_CONFIG_PATH when set."""

    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser().resolve()
    if default is not None:
        return default.resolve()
    return (REPO_ROOT / "config.yaml").resolve()


def load_config(path: Path | str | None = None) -> dict[str, Any]:
    """Read the YAML configuration; an empty file yields an empty mapping."""

    config_path = Path(path) if path is not None else get_config_path()
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")
    with config_path.open(encoding="utf-8") as handle:
        config = yaml.safe_load(handle) or {}
    if not isinstance(config, dict):
        raise ValueError(f"Configuration root in {config_path} must be a mapping.")
    return config
