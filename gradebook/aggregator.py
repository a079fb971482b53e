"""
Per-learner grade aggregation for a single assignment group.

Groups submissions by learner, drops assignments that are not yet due,
applies the flat late penalty and folds per-assignment percentages into a
points-weighted average.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Mapping, Sequence

from pydantic import ValidationError

from .config import LATE_PENALTY_RATE
from .exceptions import InvalidSubmissionError
from .models import (
    Assignment,
    AssignmentGroup,
    Course,
    LearnerResult,
    LearnerSubmission,
    SubmissionRecord,
    as_utc,
)
from .validator import validate_data

logger = logging.getLogger(__name__)


def calculate_percentage(score: float, points_possible: float, late_penalty: float) -> float:
    """
    Percentage of points possible earned after the late penalty.

    The adjusted score never drops below zero; the result may exceed 100
    when the score is above points possible.

    Args:
        score: Raw points scored.
        points_possible: Maximum points for the assignment.
        late_penalty: Points deducted for lateness.

    Returns:
        Percentage score.
    """
    adjusted_score = max(0.0, score - late_penalty)
    return (adjusted_score / points_possible) * 100


def calculate_late_penalty(assignment: Assignment, submitted_at: datetime) -> float:
    """
    Flat late penalty: a fixed share of points possible for any late submission.

    Args:
        assignment: Assignment submitted for.
        submitted_at: Submission time.

    Returns:
        Points to deduct (0 when on time).
    """
    if as_utc(submitted_at) > assignment.due_at:
        return LATE_PENALTY_RATE * assignment.points_possible
    return 0.0


def _coerce_submissions(
    submissions: Sequence[LearnerSubmission | Mapping[str, Any]],
) -> list[LearnerSubmission]:
    coerced: list[LearnerSubmission] = []
    for index, submission in enumerate(submissions):
        if isinstance(submission, LearnerSubmission):
            coerced.append(submission)
            continue
        try:
            coerced.append(LearnerSubmission.model_validate(submission))
        except ValidationError as e:
            raise InvalidSubmissionError(index, str(e)) from e
    return coerced


def group_submissions_by_learner(
    submissions: Sequence[LearnerSubmission],
) -> dict[int, dict[int, SubmissionRecord]]:
    """
    Map learner id to (assignment id -> submission payload).

    Learners keep first-appearance order. A later submission for the same
    learner and assignment replaces the earlier one.
    """
    by_learner: dict[int, dict[int, SubmissionRecord]] = {}
    for submission in submissions:
        learner_subs = by_learner.setdefault(submission.learner_id, {})
        learner_subs[submission.assignment_id] = submission.submission
    return by_learner


def grade_learner(
    learner_id: int,
    learner_subs: Mapping[int, SubmissionRecord],
    assignments_by_id: Mapping[int, Assignment],
    group_weight: float,
    now: datetime,
) -> LearnerResult:
    """
    Grade one learner's submissions.

    Args:
        learner_id: Learner identifier.
        learner_subs: Assignment id -> submission payload for this learner.
        assignments_by_id: Assignments of the group keyed by id.
        group_weight: Weight of the assignment group.
        now: Evaluation time (UTC); assignments due after it are skipped.

    Returns:
        LearnerResult with the weighted average and per-assignment percentages.
    """
    total_weighted_score = 0.0
    total_weight = 0.0
    scores: dict[int, float] = {}

    for assignment_id, submission in learner_subs.items():
        assignment = assignments_by_id.get(assignment_id)
        if assignment is None:
            logger.debug("Learner %s: skipping unknown assignment %s", learner_id, assignment_id)
            continue

        if assignment.due_at > now:
            logger.debug("Learner %s: assignment %s not yet due", learner_id, assignment_id)
            continue

        late_penalty = calculate_late_penalty(assignment, submission.submitted_at)
        percentage = calculate_percentage(submission.score, assignment.points_possible, late_penalty)
        scores[assignment_id] = percentage

        total_weighted_score += (percentage / 100) * assignment.points_possible * group_weight
        total_weight += assignment.points_possible * group_weight

    avg = (total_weighted_score / total_weight) * 100 if total_weight > 0 else 0.0
    return LearnerResult(id=learner_id, avg=avg, scores=scores)


def get_learner_data(
    course: Course,
    assignment_group: AssignmentGroup,
    submissions: Sequence[LearnerSubmission | Mapping[str, Any]],
    now: datetime | None = None,
) -> list[LearnerResult]:
    """
    Compute the weighted grade summary of every learner with a submission.

    Args:
        course: Course the group belongs to.
        assignment_group: Assignment group being graded.
        submissions: Learner submissions, as models or raw mappings.
        now: Evaluation time. Defaults to the current UTC time.

    Returns:
        One LearnerResult per distinct learner, in first-appearance order.

    Raises:
        MismatchedCourseError: If the group does not belong to the course.
        InvalidWeightError: If the group weight is not a finite number.
        InvalidPointsError: If an assignment has non-positive points possible.
        InvalidSubmissionError: If a raw submission mapping cannot be parsed.
    """
    validate_data(course, assignment_group, submissions)

    now = as_utc(now) if now is not None else datetime.now(timezone.utc)
    learner_submissions = _coerce_submissions(submissions)

    assignments_by_id = {assignment.id: assignment for assignment in assignment_group.assignments}
    by_learner = group_submissions_by_learner(learner_submissions)

    results = [
        grade_learner(learner_id, learner_subs, assignments_by_id, assignment_group.group_weight, now)
        for learner_id, learner_subs in by_learner.items()
    ]

    logger.info(
        "Graded %d learners for assignment group %s (course %s)",
        len(results),
        assignment_group.id,
        course.id,
    )
    return results
