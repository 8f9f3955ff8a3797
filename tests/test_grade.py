# tests/test_grade.py

import pytest

from models.grade import Grade


def test_grade_to_dict(sample_grade):
    assert sample_grade.to_dict() == {
        "id": None,
        "student_id": 7,
        "assignment_id": 1,
        "score": 85.0,
        "submitted_date": None,
        "comments": "",
    }


def test_grade_from_dict():
    grade = Grade.from_dict(
        {
            "id": 3,
            "student_id": "7",
            "assignment_id": 1,
            "score": 42,
            "submitted_date": "2025-09-18T14:00:00",
            "comments": "Nice work",
        }
    )

    assert grade.id == 3
    assert grade.student_id == 7
    assert grade.score == 42.0
    assert grade.is_graded
    assert grade.submitted_date.day == 18
    assert grade.comments == "Nice work"


def test_ungraded_grade_keeps_none_score():
    grade = Grade.from_dict({"student_id": 7, "assignment_id": 1, "score": None})

    assert grade.score is None
    assert not grade.is_graded


def test_negative_score_passes_through():
    assert Grade(None, 7, 1, -5).score == -5.0


def test_grade_rejects_invalid_score():
    with pytest.raises(TypeError):
        Grade(None, 7, 1, "eighty")

    with pytest.raises(ValueError):
        Grade(None, 7, 1, float("nan"))
