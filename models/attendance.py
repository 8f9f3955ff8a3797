# models/attendance.py

"""
Represents a single attendance mark for one student on one calendar day.

Dates are normalized to `datetime.date` on construction so that records created from
timestamps (e.g. "2025-09-02T08:15:00") compare equal to plain calendar days.
"""

from __future__ import annotations

import datetime
from enum import Enum
from typing import Any

from core.utils import normalize_date, normalize_id


class AttendanceStatus(str, Enum):
    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"
    EXCUSED = "excused"


class AttendanceRecord:

    def __init__(
        self,
        id: int | None,
        student_id: int,
        date: datetime.date | datetime.datetime | str,
        status: AttendanceStatus | str,
        notes: str = "",
    ):
        self._id = None if id is None else normalize_id(id)
        self._student_id = normalize_id(student_id)
        self._date = normalize_date(date)
        # status is validated by its setter
        self.status = status
        self._notes = notes

    # === properties ===

    @property
    def id(self) -> int | None:
        return self._id

    @property
    def student_id(self) -> int:
        return self._student_id

    @property
    def date(self) -> datetime.date:
        return self._date

    @property
    def status(self) -> AttendanceStatus:
        return self._status

    @status.setter
    def status(self, status: AttendanceStatus | str) -> None:
        self._status = AttendanceRecord.validate_status_input(status)

    @property
    def is_present(self) -> bool:
        return self._status == AttendanceStatus.PRESENT

    @property
    def notes(self) -> str:
        return self._notes

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "id": self._id,
            "student_id": self._student_id,
            "date": self._date.isoformat(),
            "status": self._status.value,
            "notes": self._notes,
        }

    @classmethod
    def from_dict(cls, data: dict) -> AttendanceRecord:
        return cls(
            id=data.get("id"),
            student_id=data["student_id"],
            date=data["date"],
            status=data["status"],
            notes=data.get("notes") or "",
        )

    # === dunder methods ===

    def __repr__(self) -> str:
        return f"AttendanceRecord({self._id}, {self._student_id}, {self._date.isoformat()}, {self._status.value})"

    def __str__(self) -> str:
        return f"ATTENDANCE: student id: {self._student_id}, date: {self._date.isoformat()}, status: {self._status.value}"

    # === data validators ===

    @staticmethod
    def validate_status_input(status: Any) -> AttendanceStatus:
        if isinstance(status, str):
            status = status.strip().lower()

        try:
            return AttendanceStatus(status)
        except ValueError:
            options = ", ".join(s.value for s in AttendanceStatus)
            raise ValueError(
                f"Invalid input. Attendance status must be one of: {options}."
            ) from None
