"""
Grades exporter for learner results.

Saves the results of one aggregation run to a folder as a JSON summary and
a CSV sheet.
"""

import csv
import json
from datetime import datetime
from pathlib import Path

from .config import (
    DEFAULT_GRADES_DIR,
    GRADES_CSV_FILENAME,
    GRADES_SUMMARY_FILENAME,
)
from .models import LearnerResult


class GradesExporter:
    """
    Collects learner results and exports them to JSON and CSV.
    """

    def __init__(self, output_dir: Path | None = None, evaluated_at: datetime | None = None) -> None:
        """
        Initialize the exporter.

        Args:
            output_dir: Directory to save exported grades. Defaults to ./grades/
            evaluated_at: Evaluation time the results were computed for.
        """
        self.output_dir = output_dir or DEFAULT_GRADES_DIR
        self.evaluated_at = evaluated_at
        self.results: list[LearnerResult] = []
        self.timestamp = datetime.now().isoformat()

    def add_result(self, result: LearnerResult) -> None:
        """
        Add a learner result to the export.

        Args:
            result: LearnerResult to add.
        """
        self.results.append(result)

    def add_results(self, results: list[LearnerResult]) -> None:
        for result in results:
            self.add_result(result)

    def graded_assignment_ids(self) -> list[int]:
        """
        Assignment ids graded for at least one learner, ascending.
        """
        return sorted({assignment_id for r in self.results for assignment_id in r.scores})

    def save_all(self) -> dict[str, Path]:
        """
        Save all results to the output directory.

        Creates:
        - Summary JSON with statistics and every learner record
        - Summary CSV for import into a gradebook

        Returns:
            Dictionary of output file paths.
        """
        self.output_dir.mkdir(parents=True, exist_ok=True)

        output_files: dict[str, Path] = {}

        self.results.sort(key=lambda r: r.id)

        summary_path = self.output_dir / GRADES_SUMMARY_FILENAME
        summary_data = {
            "timestamp": self.timestamp,
            "evaluated_at": self.evaluated_at.isoformat() if self.evaluated_at else None,
            "total_learners": len(self.results),
            "statistics": self._calculate_statistics(),
            "results": [result.model_dump(mode="json") for result in self.results],
        }
        with open(summary_path, "w", encoding="utf-8") as f:
            json.dump(summary_data, f, indent=2)
        output_files["summary_json"] = summary_path

        csv_path = self.output_dir / GRADES_CSV_FILENAME
        self._save_csv(csv_path)
        output_files["summary_csv"] = csv_path

        return output_files

    def _calculate_statistics(self) -> dict:
        """
        Calculate summary statistics over learner averages.

        Returns:
            Dictionary with statistics.
        """
        if not self.results:
            return {}

        averages = [r.avg for r in self.results]

        return {
            "average_avg": sum(averages) / len(averages),
            "highest_avg": max(averages),
            "lowest_avg": min(averages),
            "graded_assignments": len(self.graded_assignment_ids()),
        }

    def _save_csv(self, csv_path: Path) -> None:
        """
        Save results as CSV, one column per graded assignment.

        Args:
            csv_path: Path to save CSV file.
        """
        assignment_ids = self.graded_assignment_ids()

        header = ["learner_id", "avg"]
        header.extend(str(assignment_id) for assignment_id in assignment_ids)

        with open(csv_path, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(header)

            for result in self.results:
                row = [result.id, result.avg]
                # Blank cell where the learner has no graded score
                row.extend(result.scores.get(assignment_id, "") for assignment_id in assignment_ids)
                writer.writerow(row)


def load_results_from_dir(grades_dir: Path) -> list[LearnerResult]:
    """
    Load learner results from a grades directory.

    Args:
        grades_dir: Path to the grades directory.

    Returns:
        List of LearnerResult objects sorted by learner id (empty if no summary exists).
    """
    summary_path = grades_dir / GRADES_SUMMARY_FILENAME
    if not summary_path.exists():
        return []

    with open(summary_path, "r", encoding="utf-8") as f:
        data = json.load(f)

    results = [LearnerResult.model_validate(item) for item in data.get("results", [])]
    results.sort(key=lambda r: r.id)
    return results
