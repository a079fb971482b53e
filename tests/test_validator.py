import math

import pytest

from gradebook.exceptions import (
    InvalidInputError,
    InvalidPointsError,
    InvalidWeightError,
    MismatchedCourseError,
)
from gradebook.models import AssignmentGroup, Course
from gradebook.validator import is_usable_weight, validate_data


def make_group(data, **overrides):
    return AssignmentGroup.model_validate({**data, **overrides})


class TestValidateData:
    def test_valid_snapshot_passes(self, course, assignment_group, submissions):
        assert validate_data(course, assignment_group, submissions) is None

    def test_mismatched_course(self, assignment_group, submissions):
        with pytest.raises(MismatchedCourseError) as exc_info:
            validate_data(Course(id=999), assignment_group, submissions)
        assert exc_info.value.course_id == 999
        assert exc_info.value.group_course_id == 451

    def test_mismatched_course_checked_before_other_violations(self, assignment_group_data):
        group = make_group(
            assignment_group_data,
            group_weight="heavy",
            assignments=[{"id": 7, "due_at": "2023-01-01", "points_possible": 0}],
        )
        with pytest.raises(MismatchedCourseError):
            validate_data(Course(id=1), group, [])

    @pytest.mark.parametrize("weight", ["25", None, True, [25], math.nan, math.inf])
    def test_unusable_weight(self, course, assignment_group_data, weight):
        group = make_group(assignment_group_data, group_weight=weight)
        with pytest.raises(InvalidWeightError):
            validate_data(course, group, [])

    @pytest.mark.parametrize("weight", [25, 0.5, 0, -3])
    def test_numeric_weight_accepted(self, course, assignment_group_data, weight):
        group = make_group(assignment_group_data, group_weight=weight)
        validate_data(course, group, [])

    @pytest.mark.parametrize("points", [0, -10])
    def test_non_positive_points_without_submissions(self, course, assignment_group_data, points):
        assignments = assignment_group_data["assignments"] + [
            {"id": 4, "due_at": "2023-01-01", "points_possible": points}
        ]
        group = make_group(assignment_group_data, assignments=assignments)

        with pytest.raises(InvalidPointsError) as exc_info:
            validate_data(course, group, [])

        assert exc_info.value.assignment_id == 4
        assert "assignment 4" in str(exc_info.value)

    def test_first_bad_assignment_reported(self, course, assignment_group_data):
        group = make_group(
            assignment_group_data,
            assignments=[
                {"id": 10, "due_at": "2023-01-01", "points_possible": 5},
                {"id": 11, "due_at": "2023-01-01", "points_possible": 0},
                {"id": 12, "due_at": "2023-01-01", "points_possible": -1},
            ],
        )
        with pytest.raises(InvalidPointsError) as exc_info:
            validate_data(course, group, [])
        assert exc_info.value.assignment_id == 11

    def test_errors_share_base_class(self, assignment_group):
        with pytest.raises(InvalidInputError):
            validate_data(Course(id=1), assignment_group, [])


class TestIsUsableWeight:
    def test_int_and_float(self):
        assert is_usable_weight(25)
        assert is_usable_weight(2.5)

    def test_rejects_bool_and_strings(self):
        assert not is_usable_weight(False)
        assert not is_usable_weight("25")
