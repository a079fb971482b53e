"""
Configuration loader for the Group Gradebook.

Handles parsing and validation of YAML configuration files.
"""

from datetime import datetime
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

from .models import as_utc, coerce_timestamp


class GradebookConfig(BaseModel):
    """
    Configuration model for a gradebook run.
    """
    snapshot_path: Path = Field(..., description="Path to the course snapshot (JSON or YAML)")
    grades_dir: Optional[Path] = Field(None, description="Path to save exported grades")
    now: Optional[datetime] = Field(None, description="Evaluation time; defaults to the current time")

    save_results: bool = Field(True, description="Write the JSON/CSV export")
    verbose: bool = Field(False, description="Enable verbose output")

    @field_validator("now", mode="before")
    @classmethod
    def _parse_now(cls, value: Any) -> Any:
        return coerce_timestamp(value)

    @field_validator("now")
    @classmethod
    def _now_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value) if value is not None else None


def load_config(config_path: Path) -> GradebookConfig:
    """
    Load configuration from a YAML file.

    Relative paths are resolved against the directory holding the config file.

    Args:
        config_path: Path to the YAML configuration file.

    Returns:
        GradebookConfig object with loaded values.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config file is empty or not a mapping.
        yaml.YAMLError: If config file is invalid YAML.
        ValidationError: If config data is invalid.
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        config_data = yaml.safe_load(f)

    if not config_data:
        raise ValueError(f"Configuration file is empty: {config_path}")

    if not isinstance(config_data, dict):
        raise ValueError(f"Configuration file must contain a mapping: {config_path}")

    config_dir = config_path.parent

    for path_field in ["snapshot_path", "grades_dir"]:
        if path_field in config_data and config_data[path_field]:
            path = Path(config_data[path_field])
            if not path.is_absolute():
                config_data[path_field] = config_dir / path

    return GradebookConfig(**config_data)
