"""
Group Gradebook: weighted per-learner grades for one assignment group

Usage:
  gradebook [--config=PATH] [--now=DATETIME] [--no-save] [--verbose]
  gradebook (-h | --help)

Options:
  --config=PATH    Path to YAML configuration file (default: gradebook_config.yml).
  --now=DATETIME   Evaluation time (ISO date or datetime); overrides the config value.
  --no-save        Print results without writing the JSON/CSV export.
  --verbose        Show debug logging.
  -h --help        Show this screen.
"""

import logging
from datetime import datetime, timezone
from pathlib import Path

import yaml
from docopt import docopt
from pydantic import TypeAdapter, ValidationError

from .aggregator import get_learner_data
from .config import DEFAULT_CONFIG_PATH, DEFAULT_GRADES_DIR, SCORE_DISPLAY_PRECISION
from .config_loader import load_config
from .exceptions import GradebookError
from .grades_exporter import GradesExporter
from .models import LearnerResult, as_utc, coerce_timestamp
from .snapshot_loader import load_snapshot

_datetime_adapter = TypeAdapter(datetime)


def parse_now(value: str) -> datetime:
    """
    Parse a --now value (ISO date or datetime) into a UTC datetime.

    Raises:
        ValueError: If the value is not an ISO date or datetime.
    """
    return as_utc(_datetime_adapter.validate_python(coerce_timestamp(value)))


def print_learner_summary(result: LearnerResult) -> None:
    """
    Print a summary of one learner's grades to console.

    Args:
        result: LearnerResult to summarize.
    """
    p = SCORE_DISPLAY_PRECISION
    print(f"\n  {'='*50}")
    print(f"  Learner: {result.id}")
    print(f"  Weighted Average: {result.avg:.{p}f}%")
    print(f"  {'='*50}")

    if not result.scores:
        print("  (no graded assignments)")

    for assignment_id, percentage in result.scores.items():
        print(f"  Assignment {assignment_id}: {percentage:.{p}f}%")

    print()


def run_gradebook(
    snapshot_path: Path,
    now: datetime | None = None,
    grades_dir: Path | None = None,
    save_results: bool = True,
) -> list[LearnerResult]:
    """
    Load a snapshot, grade every learner and optionally export the results.

    Args:
        snapshot_path: Path to the course snapshot file.
        now: Evaluation time. Defaults to the current time.
        grades_dir: Optional path to save exported grades.
        save_results: Write the JSON/CSV export.

    Returns:
        List of LearnerResult objects.
    """
    print(f"Loading snapshot from {snapshot_path}...")
    snapshot = load_snapshot(snapshot_path)
    group = snapshot.assignment_group
    print(
        f"Course {snapshot.course.id}, assignment group {group.id}: "
        f"{len(group.assignments)} assignments, {len(snapshot.learner_submissions)} submissions"
    )

    # Resolved once so the export records the time the grades were computed for
    now = as_utc(now) if now is not None else datetime.now(timezone.utc)
    results = get_learner_data(snapshot.course, group, snapshot.learner_submissions, now=now)

    for result in results:
        print_learner_summary(result)

    if save_results and results:
        print("Saving learner grades...")
        exporter = GradesExporter(output_dir=grades_dir or DEFAULT_GRADES_DIR, evaluated_at=now)
        exporter.add_results(results)
        output_files = exporter.save_all()
        print(f"  Summary JSON: {output_files.get('summary_json')}")
        print(f"  Summary CSV:  {output_files.get('summary_csv')}")

    print("\n" + "=" * 60)
    print("GRADING COMPLETE")
    print("=" * 60)
    print(f"Learners graded: {len(results)}")

    return results


def main(argv: list[str] | None = None) -> int:
    """
    Main CLI entrypoint.

    Returns:
        Exit code (0 for success, 1 for error).
    """
    arguments = docopt(__doc__, argv=argv)
    config_path = Path(arguments["--config"]) if arguments["--config"] else DEFAULT_CONFIG_PATH

    if not config_path.exists():
        print(f"Error: Configuration file not found at {config_path}")
        return 1

    try:
        config = load_config(config_path)
        print(f"Loaded configuration from {config_path}")
    except (ValueError, ValidationError, OSError, yaml.YAMLError) as e:
        print(f"Error loading config: {e}")
        return 1

    verbose = config.verbose or arguments["--verbose"]
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    now = config.now
    if arguments["--now"]:
        try:
            now = parse_now(arguments["--now"])
        except ValueError as e:
            print(f"Error: invalid --now value {arguments['--now']!r}: {e}")
            return 1

    try:
        run_gradebook(
            snapshot_path=config.snapshot_path,
            now=now,
            grades_dir=config.grades_dir,
            save_results=config.save_results and not arguments["--no-save"],
        )
        return 0
    except GradebookError as e:
        print(f"\nError: {e.message}")
        if verbose:
            import traceback
            traceback.print_exc()
        return 1
