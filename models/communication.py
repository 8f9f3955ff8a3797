# models/communication.py

"""
Represents one entry in a student's parent-contact log (an email, phone call, meeting, or note).
"""

from __future__ import annotations

import datetime
from enum import Enum
from typing import Any

from core.utils import normalize_date, normalize_id


class CommunicationType(str, Enum):
    EMAIL = "email"
    PHONE = "phone"
    MEETING = "meeting"
    NOTE = "note"


class Communication:

    def __init__(
        self,
        id: int | None,
        student_id: int,
        type: CommunicationType | str,
        subject: str,
        date: datetime.date | datetime.datetime | str,
        notes: str = "",
    ):
        self._id = None if id is None else normalize_id(id)
        self._student_id = normalize_id(student_id)
        self._type = Communication.validate_type_input(type)
        self._subject = subject
        self._date = normalize_date(date)
        self._notes = notes

    @property
    def id(self) -> int | None:
        return self._id

    @property
    def student_id(self) -> int:
        return self._student_id

    @property
    def type(self) -> CommunicationType:
        return self._type

    @property
    def subject(self) -> str:
        return self._subject

    @property
    def date(self) -> datetime.date:
        return self._date

    @property
    def notes(self) -> str:
        return self._notes

    def to_dict(self) -> dict:
        return {
            "id": self._id,
            "student_id": self._student_id,
            "type": self._type.value,
            "subject": self._subject,
            "date": self._date.isoformat(),
            "notes": self._notes,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Communication:
        return cls(
            id=data.get("id"),
            student_id=data["student_id"],
            type=data["type"],
            subject=data["subject"],
            date=data["date"],
            notes=data.get("notes") or "",
        )

    def __repr__(self) -> str:
        return f"Communication({self._id}, {self._student_id}, {self._type.value}, {self._subject})"

    def __str__(self) -> str:
        return f"COMMUNICATION: {self._subject} ({self._type.value}) - (ID: {self._id})"

    @staticmethod
    def validate_type_input(type: Any) -> CommunicationType:
        if isinstance(type, str):
            type = type.strip().lower()

        try:
            return CommunicationType(type)
        except ValueError:
            options = ", ".join(t.value for t in CommunicationType)
            raise ValueError(
                f"Invalid input. Communication type must be one of: {options}."
            ) from None
