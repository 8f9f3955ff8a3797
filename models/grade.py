# models/grade.py

"""
Represents a student's score on a specific assignment.

Each `Grade` records the student's ID, the assignment ID, the raw score, and optional
submission metadata. A `score` of None means the work has not been graded yet; such grades
are excluded from averages rather than counted as zero.

Notes:
- Scores are deliberately not clamped. Negative scores and scores above the assignment's
  points pass through to the aggregation engine unchanged.
- Percentages and letter grades are computed externally by `core.aggregation`.
"""

from __future__ import annotations

import datetime
import math
from enum import Enum
from typing import Any

from core.utils import normalize_id


class LetterGrade(str, Enum):
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    F = "F"
    UNGRADED = "Ungraded"


class Grade:

    def __init__(
        self,
        id: int | None,
        student_id: int,
        assignment_id: int,
        score: float | None,
        submitted_date: datetime.datetime | None = None,
        comments: str = "",
    ):
        self._id = None if id is None else normalize_id(id)
        self._student_id = normalize_id(student_id)
        self._assignment_id = normalize_id(assignment_id)
        # score is validated by its setter
        self.score = score
        self._submitted_date = submitted_date
        self._comments = comments

    # === properties ===

    @property
    def id(self) -> int | None:
        return self._id

    @property
    def student_id(self) -> int:
        return self._student_id

    @property
    def assignment_id(self) -> int:
        return self._assignment_id

    @property
    def score(self) -> float | None:
        return self._score

    @score.setter
    def score(self, score: float | None) -> None:
        self._score = Grade.validate_score_input(score)

    @property
    def is_graded(self) -> bool:
        return self._score is not None

    @property
    def submitted_date(self) -> datetime.datetime | None:
        return self._submitted_date

    @property
    def comments(self) -> str:
        return self._comments

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "id": self._id,
            "student_id": self._student_id,
            "assignment_id": self._assignment_id,
            "score": self._score,
            "submitted_date": (
                self._submitted_date.isoformat() if self._submitted_date else None
            ),
            "comments": self._comments,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Grade:
        submitted = data.get("submitted_date")

        return cls(
            id=data.get("id"),
            student_id=data["student_id"],
            assignment_id=data["assignment_id"],
            score=data.get("score"),
            submitted_date=(
                datetime.datetime.fromisoformat(submitted) if submitted else None
            ),
            comments=data.get("comments") or "",
        )

    # === dunder methods ===

    def __repr__(self) -> str:
        return f"Grade({self._id}, {self._student_id}, {self._assignment_id}, {self._score})"

    def __str__(self) -> str:
        return f"GRADE: id: {self._id}, student id: {self._student_id}, assignment id: {self._assignment_id}"

    # === data validators ===

    @staticmethod
    def validate_score_input(score: Any) -> float | None:
        """
        Validates and normalizes input for a `Grade` score.

        Accepts None as a valid input (ungraded), otherwise:
            - Casts to float.
            - Ensures the number is finite.

        Args:
            score (Any): The input value to validate.

        Returns:
            The normalized score (float or None).

        Raises:
            TypeError: If the input is not None and cannot be cast to float.
            ValueError: If the input is non-finite.

        Notes:
            - Negative scores are accepted; the engine does not clamp them.
        """
        if score is None:
            return None

        if isinstance(score, bool):
            raise TypeError("Invalid input. Score must be a number or None.")

        try:
            score = float(score)

        except (TypeError, ValueError):
            raise TypeError("Invalid input. Score must be a number or None.") from None

        if not math.isfinite(score):
            raise ValueError("Invalid input. Score must be a finite number.")

        return score
