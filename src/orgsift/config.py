"""Configuration loader with YAML and environment variable support.

This module reads optional defaults from ~/.config/orgsift/config.yaml and
allows environment variable overrides using the ORGSIFT_* prefix. Command
line flags override both.

Environment variables:
- ORGSIFT_OUTPUT_FORMAT: Override output.format (json or yaml)
- ORGSIFT_INCLUDE_LEVEL: Override output.include_level (true/false)
- ORGSIFT_RENDER_MODE: Override render.mode (plain, html or markdown)
- ORGSIFT_LOG_LEVEL: Override logging.level
- ORGSIFT_LOG_FILE: Override logging.file
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from orgsift.models.config import Config


def default_config_path() -> Path:
    return Path.home() / ".config" / "orgsift" / "config.yaml"


def load_config(config_path: Optional[Path] = None) -> Config:
    """Load configuration from YAML file with environment variable overrides.

    Unlike an explicit path, a missing default config file is not an error:
    every setting has a default.

    Args:
        config_path: Path to config file. If None, uses ~/.config/orgsift/config.yaml

    Returns:
        Validated Config object

    Raises:
        FileNotFoundError: If an explicitly given config file doesn't exist
        ValueError: If the config file is not valid YAML or fails validation
    """
    explicit = config_path is not None
    if config_path is None:
        config_path = default_config_path()

    if config_path.exists():
        try:
            with config_path.open(encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {config_path}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Configuration in {config_path} must be a mapping")
    elif explicit:
        raise FileNotFoundError(f"Configuration file not found at {config_path}")
    else:
        data = {}

    data = _apply_env_overrides(data)

    try:
        return Config(**data)
    except ValidationError as e:
        raise ValueError(f"Configuration validation failed: {e}") from e


def _apply_env_overrides(data: Dict[str, Any]) -> Dict[str, Any]:
    """Apply environment variable overrides to configuration data.

    Environment variables use the format: ORGSIFT_SECTION_KEY
    For example: ORGSIFT_OUTPUT_FORMAT sets data['output']['format']

    Args:
        data: Base configuration dictionary from YAML

    Returns:
        Configuration dictionary with environment overrides applied
    """
    for section in ("output", "render", "logging"):
        if not isinstance(data.get(section), dict):
            data[section] = {}

    if env_format := os.getenv("ORGSIFT_OUTPUT_FORMAT"):
        data["output"]["format"] = env_format

    if env_include_level := os.getenv("ORGSIFT_INCLUDE_LEVEL"):
        data["output"]["include_level"] = env_include_level

    if env_render_mode := os.getenv("ORGSIFT_RENDER_MODE"):
        data["render"]["mode"] = env_render_mode.lower()

    if env_log_level := os.getenv("ORGSIFT_LOG_LEVEL"):
        data["logging"]["level"] = env_log_level

    if env_log_file := os.getenv("ORGSIFT_LOG_FILE"):
        data["logging"]["file"] = env_log_file

    return data
