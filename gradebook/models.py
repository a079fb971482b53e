"""
Pydantic models for the Group Gradebook.

Defines the course snapshot consumed by the aggregator (course, assignment
group, learner submissions) and the per-learner result it produces.
"""

from datetime import date, datetime, time, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def as_utc(value: datetime) -> datetime:
    """
    Return a timezone-aware UTC datetime. Naive values are taken as UTC.

    Args:
        value: Datetime to normalize.

    Returns:
        Equivalent datetime in UTC.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def coerce_timestamp(value: Any) -> Any:
    """
    Turn date-only inputs into midnight UTC before pydantic parses them.

    Accepts `datetime.date` objects and ISO `YYYY-MM-DD` strings; anything
    else is returned unchanged for pydantic to validate.
    """
    if isinstance(value, datetime):
        return as_utc(value)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    if isinstance(value, str) and len(value.strip()) == 10:
        try:
            day = date.fromisoformat(value.strip())
        except ValueError:
            return value
        return datetime.combine(day, time.min, tzinfo=timezone.utc)
    return value


class SnapshotModel(BaseModel):
    """
    Base for all snapshot entities: immutable, extra keys ignored.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")


class Course(SnapshotModel):
    """
    Course owning the assignment group. Only `id` is consulted.

    Attributes:
        id: Course identifier.
        name: Course title.
    """

    id: int = Field(..., description="Course identifier")
    name: str = Field(default="", description="Course title")


class Assignment(SnapshotModel):
    """
    A single assignment inside an assignment group.

    Attributes:
        id: Assignment identifier.
        name: Assignment title.
        due_at: Due date (UTC).
        points_possible: Maximum points. Must be positive, checked by the validator.
    """

    id: int = Field(..., description="Assignment identifier")
    name: str = Field(default="", description="Assignment title")
    due_at: datetime = Field(..., description="Due date (UTC)")
    points_possible: float = Field(..., description="Maximum points for the assignment")

    @field_validator("due_at", mode="before")
    @classmethod
    def _parse_due_at(cls, value: Any) -> Any:
        return coerce_timestamp(value)

    @field_validator("due_at")
    @classmethod
    def _due_at_utc(cls, value: datetime) -> datetime:
        return as_utc(value)


class AssignmentGroup(SnapshotModel):
    """
    Weighted collection of assignments belonging to one course.

    `group_weight` is stored as given; whether it is numeric is decided by
    `validate_data`, so a bad weight surfaces as `InvalidWeightError`.

    Attributes:
        id: Group identifier.
        name: Group title.
        course_id: Identifier of the owning course.
        group_weight: Contribution weight of the group.
        assignments: Assignments in the group, in declared order.
    """

    id: int = Field(..., description="Assignment group identifier")
    name: str = Field(default="", description="Assignment group title")
    course_id: int = Field(..., description="Owning course identifier")
    group_weight: Any = Field(..., description="Contribution weight of the group")
    assignments: list[Assignment] = Field(default_factory=list, description="Assignments in the group")


class SubmissionRecord(SnapshotModel):
    """
    Submission payload: when it was turned in and the raw score.
    """

    submitted_at: datetime = Field(..., description="Submission time (UTC)")
    score: float = Field(..., description="Raw points scored")

    @field_validator("submitted_at", mode="before")
    @classmethod
    def _parse_submitted_at(cls, value: Any) -> Any:
        return coerce_timestamp(value)

    @field_validator("submitted_at")
    @classmethod
    def _submitted_at_utc(cls, value: datetime) -> datetime:
        return as_utc(value)


class LearnerSubmission(SnapshotModel):
    """
    One learner's submission for one assignment.

    Attributes:
        learner_id: Learner identifier.
        assignment_id: Identifier of the assignment submitted for.
        submission: Submission payload.
    """

    learner_id: int = Field(..., description="Learner identifier")
    assignment_id: int = Field(..., description="Assignment identifier")
    submission: SubmissionRecord = Field(..., description="Submission payload")


class CourseSnapshot(SnapshotModel):
    """
    Everything needed for one aggregation run, as loaded from a snapshot file.
    """

    course: Course
    assignment_group: AssignmentGroup
    learner_submissions: list[LearnerSubmission] = Field(default_factory=list)


class LearnerResult(BaseModel):
    """
    Weighted grade summary for one learner.

    Attributes:
        id: Learner identifier.
        avg: Points-weighted average percentage over graded assignments.
        scores: Percentage per graded assignment, in ascending assignment id order.
    """

    id: int = Field(..., description="Learner identifier")
    avg: float = Field(..., description="Weighted average percentage")
    scores: dict[int, float] = Field(
        default_factory=dict, description="Percentage score per graded assignment id"
    )

    @field_validator("scores")
    @classmethod
    def _sort_scores(cls, value: dict[int, float]) -> dict[int, float]:
        return {assignment_id: value[assignment_id] for assignment_id in sorted(value)}

    def as_record(self) -> dict[str | int, float | int]:
        """
        Flatten into `{"id": ..., "avg": ..., <assignment_id>: <percentage>}`.

        Returns:
            Flat mapping with assignment ids as integer keys.
        """
        record: dict[str | int, float | int] = {"id": self.id, "avg": self.avg}
        record.update(self.scores)
        return record
