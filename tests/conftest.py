import json
from datetime import datetime, timezone

import pytest
import yaml

from gradebook.models import AssignmentGroup, Course, LearnerSubmission


@pytest.fixture
def course_data():
    return {"id": 451, "name": "Introduction to JavaScript"}


@pytest.fixture
def assignment_group_data():
    return {
        "id": 12345,
        "name": "Fundamentals of JavaScript",
        "course_id": 451,
        "group_weight": 25,
        "assignments": [
            {"id": 1, "name": "Declare a Variable", "due_at": "2023-01-25", "points_possible": 50},
            {"id": 2, "name": "Write a Function", "due_at": "2023-02-27", "points_possible": 150},
            {"id": 3, "name": "Code the World", "due_at": "3156-11-15", "points_possible": 500},
        ],
    }


@pytest.fixture
def submissions_data():
    return [
        {"learner_id": 125, "assignment_id": 1, "submission": {"submitted_at": "2023-01-25", "score": 47}},
        {"learner_id": 125, "assignment_id": 2, "submission": {"submitted_at": "2023-02-12", "score": 150}},
        {"learner_id": 125, "assignment_id": 3, "submission": {"submitted_at": "2023-01-25", "score": 400}},
        {"learner_id": 132, "assignment_id": 1, "submission": {"submitted_at": "2023-01-24", "score": 39}},
        {"learner_id": 132, "assignment_id": 2, "submission": {"submitted_at": "2023-03-07", "score": 140}},
    ]


@pytest.fixture
def course(course_data):
    return Course.model_validate(course_data)


@pytest.fixture
def assignment_group(assignment_group_data):
    return AssignmentGroup.model_validate(assignment_group_data)


@pytest.fixture
def submissions(submissions_data):
    return [LearnerSubmission.model_validate(s) for s in submissions_data]


@pytest.fixture
def now():
    return datetime(2023, 3, 15, tzinfo=timezone.utc)


@pytest.fixture
def snapshot_data(course_data, assignment_group_data, submissions_data):
    return {
        "course": course_data,
        "assignment_group": assignment_group_data,
        "learner_submissions": submissions_data,
    }


@pytest.fixture
def snapshot_json_file(tmp_path, snapshot_data):
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps(snapshot_data), encoding="utf-8")
    return path


@pytest.fixture
def snapshot_yaml_file(tmp_path, snapshot_data):
    path = tmp_path / "snapshot.yml"
    path.write_text(yaml.safe_dump(snapshot_data), encoding="utf-8")
    return path
