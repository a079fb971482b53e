"""
Custom exceptions for the Group Gradebook.
"""

from typing import Any, Dict, Optional


class GradebookError(Exception):
    """Base exception for all gradebook errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InvalidInputError(GradebookError):
    """Raised when the course snapshot fails validation."""
    pass


class MismatchedCourseError(InvalidInputError):
    """Raised when the assignment group does not belong to the course."""

    def __init__(self, course_id: int, group_course_id: int):
        super().__init__(
            f"AssignmentGroup belongs to course {group_course_id}, not to course {course_id}.",
            details={"course_id": course_id, "group_course_id": group_course_id},
        )
        self.course_id = course_id
        self.group_course_id = group_course_id


class InvalidWeightError(InvalidInputError):
    """Raised when group_weight is not a usable number."""

    def __init__(self, group_weight: Any):
        super().__init__(
            f"group_weight must be a finite number, got {group_weight!r}.",
            details={"group_weight": group_weight},
        )
        self.group_weight = group_weight


class InvalidPointsError(InvalidInputError):
    """Raised when an assignment has non-positive points_possible."""

    def __init__(self, assignment_id: int, points_possible: float):
        super().__init__(
            f"points_possible for assignment {assignment_id} must be greater than zero, "
            f"got {points_possible!r}.",
            details={"assignment_id": assignment_id, "points_possible": points_possible},
        )
        self.assignment_id = assignment_id
        self.points_possible = points_possible


class InvalidSubmissionError(InvalidInputError):
    """Raised when a raw submission record cannot be read."""

    def __init__(self, index: int, reason: str):
        super().__init__(
            f"Submission #{index} is invalid: {reason}",
            details={"index": index, "reason": reason},
        )
        self.index = index
        self.reason = reason


class SnapshotLoadError(GradebookError):
    """Raised when a snapshot file cannot be read or parsed."""
    pass
