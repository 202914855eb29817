"""
turbocut.config - YAML config loading and validation.

Handles loading turbocut.yaml from a working directory and validating the
export defaults it carries.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from turbocut.exceptions import ConfigError

CONFIG_FILENAME = "turbocut.yaml"


class TurboCutConfig(BaseModel):
    """Resolved export configuration."""

    frame_rate: float | None = Field(default=None, gt=0.0)
    edl_title: str = "Silence Removed"
    clip_name: str | None = None
    probe_timeout: float = Field(default=30.0, gt=0.0)
    ffprobe_path: str = "ffprobe"

    @field_validator("edl_title")
    @classmethod
    def validate_edl_title(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("edl_title must not be empty")
        if "\n" in v or "\r" in v:
            raise ValueError("edl_title must be a single line")
        return v


def load_config(project_dir: Path) -> TurboCutConfig:
    """Load and validate configuration from a directory.

    Raises:
        FileNotFoundError: If the directory has no turbocut.yaml
        ConfigError: If the file is not valid YAML or fails validation
    """
    config_file = project_dir / CONFIG_FILENAME
    if not config_file.exists():
        raise FileNotFoundError(f"No {CONFIG_FILENAME} found in {project_dir}")

    try:
        with open(config_file, encoding="utf-8") as f:
            raw_config = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_file}: {e}") from e

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Expected a mapping in {config_file}")

    try:
        return TurboCutConfig(**raw_config)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {config_file}: {e}") from e


def find_config_dir(start: Path | None = None) -> Path | None:
    """Find the nearest directory containing turbocut.yaml, walking upwards."""
    current = (start or Path.cwd()).absolute()
    while True:
        if (current / CONFIG_FILENAME).exists():
            return current
        if current == current.parent:
            return None
        current = current.parent


def create_default_config(frame_rate: float | None = None) -> dict[str, Any]:
    """Create a default config dict."""
    defaults = TurboCutConfig(frame_rate=frame_rate).model_dump()
    return defaults


def write_config(config: dict[str, Any], path: Path) -> None:
    """Write configuration to a YAML file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(config, f, default_flow_style=False, sort_keys=False)
