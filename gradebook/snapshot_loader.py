"""
Loader for course snapshot files (JSON or YAML).

A snapshot holds the `course`, `assignment_group` and `learner_submissions`
for one aggregation run.
"""

import json
from pathlib import Path

import yaml
from pydantic import ValidationError

from .config import SNAPSHOT_JSON_SUFFIXES, SNAPSHOT_SUFFIXES
from .exceptions import SnapshotLoadError
from .models import CourseSnapshot


def load_snapshot(snapshot_path: Path) -> CourseSnapshot:
    """
    Load a course snapshot from disk.

    Args:
        snapshot_path: Path to a .json, .yml or .yaml snapshot file.

    Returns:
        Parsed CourseSnapshot.

    Raises:
        SnapshotLoadError: If the file is missing, has an unsupported suffix,
            cannot be parsed or does not match the snapshot schema.
    """
    if not snapshot_path.exists():
        raise SnapshotLoadError(f"Snapshot file not found: {snapshot_path}")

    suffix = snapshot_path.suffix.lower()
    if suffix not in SNAPSHOT_SUFFIXES:
        raise SnapshotLoadError(
            f"Unsupported snapshot format '{suffix}' (expected one of {', '.join(SNAPSHOT_SUFFIXES)})"
        )

    try:
        with open(snapshot_path, "r", encoding="utf-8") as f:
            if suffix in SNAPSHOT_JSON_SUFFIXES:
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise SnapshotLoadError(f"Could not parse {snapshot_path}: {e}") from e

    if not isinstance(data, dict):
        raise SnapshotLoadError(f"Snapshot {snapshot_path} must contain a mapping at the top level")

    try:
        return CourseSnapshot.model_validate(data)
    except ValidationError as e:
        raise SnapshotLoadError(f"Invalid snapshot {snapshot_path}: {e}") from e
