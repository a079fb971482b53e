"""
Configuration constants for the Group Gradebook.
"""

from pathlib import Path


# Grading policy
# Flat deduction, as a fraction of points possible, for any late submission
LATE_PENALTY_RATE: float = 0.1

# Snapshot files
SNAPSHOT_JSON_SUFFIXES: list[str] = [".json"]
SNAPSHOT_YAML_SUFFIXES: list[str] = [".yml", ".yaml"]
SNAPSHOT_SUFFIXES: list[str] = SNAPSHOT_JSON_SUFFIXES + SNAPSHOT_YAML_SUFFIXES

# Default paths (can be overridden via config file)
DEFAULT_CONFIG_PATH: Path = Path("gradebook_config.yml")
DEFAULT_GRADES_DIR: Path = Path("grades")
GRADES_SUMMARY_FILENAME: str = "learner_grades.json"
GRADES_CSV_FILENAME: str = "learner_grades.csv"

# Console output
SCORE_DISPLAY_PRECISION: int = 2
