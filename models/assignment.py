# models/assignment.py

"""
The Assignment model represents classroom assignments, quizzes, or any other graded component.

`points` is the denominator used to turn a raw score into a percentage and `weight` is the
assignment's share of a student's weighted average. Points may be missing or zero on imported
records; the aggregation engine skips such assignments rather than dividing by them.
"""

from __future__ import annotations

import datetime
import math
from typing import Any

from core.utils import normalize_id


class Assignment:

    def __init__(
        self,
        id: int | None,
        title: str,
        points: float | None,
        weight: float = 1.0,
        category: str | None = None,
        due_date: datetime.datetime | None = None,
    ):
        self._id = None if id is None else normalize_id(id)
        self._title = title
        # points and weight are validated by their setters
        self.points = points
        self.weight = weight
        self._category = category
        self._due_date = due_date

    @property
    def id(self) -> int | None:
        return self._id

    @property
    def title(self) -> str:
        return self._title

    @title.setter
    def title(self, title: str) -> None:
        self._title = title

    @property
    def category(self) -> str | None:
        return self._category

    @property
    def points(self) -> float | None:
        return self._points

    @points.setter
    def points(self, points: float | None) -> None:
        self._points = (
            None
            if points is None
            else Assignment.validate_number_input(points, "Points")
        )

    @property
    def weight(self) -> float:
        return self._weight

    @weight.setter
    def weight(self, weight: float) -> None:
        self._weight = Assignment.validate_number_input(weight, "Weight")

    @property
    def due_date(self) -> datetime.datetime | None:
        return self._due_date

    @property
    def due_date_iso(self) -> str | None:
        return self._due_date.isoformat() if self._due_date else None

    @property
    def is_gradable(self) -> bool:
        return self._points is not None and self._points > 0

    def to_dict(self) -> dict:
        return {
            "id": self._id,
            "title": self._title,
            "category": self._category,
            "points": self._points,
            "weight": self._weight,
            "due_date": self.due_date_iso,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Assignment:
        due_date_str = data.get("due_date")
        due_date = (
            datetime.datetime.fromisoformat(due_date_str) if due_date_str else None
        )
        weight = data.get("weight")

        return cls(
            id=data.get("id"),
            title=data["title"],
            points=data.get("points"),
            weight=1.0 if weight is None else weight,
            category=data.get("category"),
            due_date=due_date,
        )

    def __repr__(self) -> str:
        return f"Assignment({self._id}, {self._title}, {self._points}, {self._weight})"

    def __str__(self) -> str:
        return f"ASSIGNMENT: {self._title} - (ID: {self._id})"

    # === data validators ===

    @staticmethod
    def validate_number_input(value: Any, label: str) -> float:
        """
        Validates and normalizes input for an `Assignment` points or weight value.

        Accepts any input, and then:
            - Casts to float.
            - Ensures the number is finite.
            - Ensures it is non-negative.

        Args:
            value (Any): The input value to validate.
            label (str): The field name used in error messages.

        Returns:
            The normalized value (float).

        Raises:
            TypeError: If the input cannot be cast to float.
            ValueError: If the input is non-finite or less than zero.
        """
        if isinstance(value, bool):
            raise TypeError(f"Invalid input. {label} must be a number.")

        try:
            value = float(value)

        except (TypeError, ValueError):
            raise TypeError(f"Invalid input. {label} must be a number.") from None

        if not math.isfinite(value):
            raise ValueError(f"Invalid input. {label} must be a finite number.")

        if value < 0:
            raise ValueError(f"Invalid input. {label} cannot be less than zero.")

        return value
