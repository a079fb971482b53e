"""
Consistency checks run on a course snapshot before any grading.
"""

import math
from typing import Sequence

from .exceptions import InvalidPointsError, InvalidWeightError, MismatchedCourseError
from .models import AssignmentGroup, Course, LearnerSubmission


def is_usable_weight(group_weight: object) -> bool:
    """
    Check that a group weight is a finite real number (bools excluded).
    """
    if isinstance(group_weight, bool) or not isinstance(group_weight, (int, float)):
        return False
    return math.isfinite(group_weight)


def validate_data(
    course: Course,
    assignment_group: AssignmentGroup,
    submissions: Sequence[LearnerSubmission] = (),
) -> None:
    """
    Validate a course snapshot, failing on the first violation found.

    Checks, in order: the group belongs to the course, the group weight is
    numeric, and every assignment in the group has positive points possible.
    Submissions are accepted for call symmetry but not inspected.

    Args:
        course: Course the group should belong to.
        assignment_group: Assignment group to check.
        submissions: Learner submissions (unused).

    Raises:
        MismatchedCourseError: If the group's course_id differs from course.id.
        InvalidWeightError: If group_weight is not a finite number.
        InvalidPointsError: If any assignment has points_possible <= 0.
    """
    if assignment_group.course_id != course.id:
        raise MismatchedCourseError(course.id, assignment_group.course_id)

    if not is_usable_weight(assignment_group.group_weight):
        raise InvalidWeightError(assignment_group.group_weight)

    for assignment in assignment_group.assignments:
        if assignment.points_possible <= 0:
            raise InvalidPointsError(assignment.id, assignment.points_possible)
