# models/student.py

"""
Represents a student on the class roster.

Stores identifying information (name, email, phone), the student's grade level and
enrollment status, and the parent contact details used for home communication.

Includes functionality for:
- Validating and normalizing email input
- Validating grade level and enrollment status against their enums
- Serializing to and from the record store's field names
- Mutating individual fields via property access

Attendance is not stored on the student; it lives in separate `AttendanceRecord` objects
keyed by `student_id`.
"""

from __future__ import annotations

import datetime
import re
from enum import Enum
from typing import Any

from core.utils import normalize_date, normalize_id


class GradeLevel(str, Enum):
    NINTH = "9th Grade"
    TENTH = "10th Grade"
    ELEVENTH = "11th Grade"
    TWELFTH = "12th Grade"


class StudentStatus(str, Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"
    GRADUATED = "Graduated"


class Student:

    def __init__(
        self,
        id: int | None,
        first_name: str,
        last_name: str,
        grade_level: GradeLevel | str,
        status: StudentStatus | str = StudentStatus.ACTIVE,
        email: str | None = None,
        phone: str | None = None,
        date_enrolled: datetime.date | str | None = None,
        parent_name: str = "",
        parent_email: str = "",
        parent_phone: str = "",
    ):
        self._id = None if id is None else normalize_id(id)
        self._first_name = first_name
        self._last_name = last_name
        # grade_level, status, and email are validated by their setters
        self.grade_level = grade_level
        self.status = status
        self.email = email
        self._phone = phone
        self._date_enrolled = (
            normalize_date(date_enrolled) if date_enrolled else None
        )
        self._parent_name = parent_name
        self._parent_email = parent_email
        self._parent_phone = parent_phone

    # === properties ===

    @property
    def id(self) -> int | None:
        return self._id

    @property
    def first_name(self) -> str:
        return self._first_name

    @first_name.setter
    def first_name(self, first_name: str) -> None:
        self._first_name = first_name

    @property
    def last_name(self) -> str:
        return self._last_name

    @last_name.setter
    def last_name(self, last_name: str) -> None:
        self._last_name = last_name

    @property
    def full_name(self) -> str:
        return f"{self._first_name} {self._last_name}"

    @property
    def email(self) -> str | None:
        return self._email

    @email.setter
    def email(self, email: str | None) -> None:
        self._email = Student.validate_email_input(email) if email else None

    @property
    def phone(self) -> str | None:
        return self._phone

    @property
    def grade_level(self) -> GradeLevel:
        return self._grade_level

    @grade_level.setter
    def grade_level(self, grade_level: GradeLevel | str) -> None:
        self._grade_level = Student.validate_grade_level_input(grade_level)

    @property
    def status(self) -> StudentStatus:
        return self._status

    @status.setter
    def status(self, status: StudentStatus | str) -> None:
        self._status = Student.validate_status_input(status)

    @property
    def is_active(self) -> bool:
        return self._status == StudentStatus.ACTIVE

    @property
    def date_enrolled(self) -> datetime.date | None:
        return self._date_enrolled

    # --- parent contact ---

    @property
    def parent_name(self) -> str:
        return self._parent_name

    @property
    def parent_email(self) -> str:
        return self._parent_email

    @property
    def parent_phone(self) -> str:
        return self._parent_phone

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "id": self._id,
            "first_name": self._first_name,
            "last_name": self._last_name,
            "email": self._email,
            "phone": self._phone,
            "grade_level": self._grade_level.value,
            "date_enrolled": (
                self._date_enrolled.isoformat() if self._date_enrolled else None
            ),
            "status": self._status.value,
            "parent_name": self._parent_name,
            "parent_email": self._parent_email,
            "parent_phone": self._parent_phone,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Student:
        return cls(
            id=data.get("id"),
            first_name=data["first_name"],
            last_name=data["last_name"],
            grade_level=data["grade_level"],
            status=data.get("status") or StudentStatus.ACTIVE,
            email=data.get("email"),
            phone=data.get("phone"),
            date_enrolled=data.get("date_enrolled"),
            parent_name=data.get("parent_name") or "",
            parent_email=data.get("parent_email") or "",
            parent_phone=data.get("parent_phone") or "",
        )

    # === dunder methods ===

    def __repr__(self) -> str:
        return f"Student({self._id}, {self._first_name}, {self._last_name}, {self._grade_level.value}, {self._status.value})"

    def __str__(self) -> str:
        return f"STUDENT: {self.full_name} - (ID: {self._id})"

    # === data validators ===

    @staticmethod
    def validate_email_input(email: str) -> str:
        """
        Validates and normalizes a Student email address.

        Normalizes the input by stripping whitespace and converting to lowercase.
        Ensures the email:
            - Contains exactly one '@' symbol
            - Has non-whitespace characters on both sides of the '@'
            - Contains at least one '.' after the '@' to separate the domain and TLD

        Args:
            email: The input email string to validate.

        Returns:
            A normalized, lowercase version of the email if valid.

        Raises:
            TypeError: If the input is not a string.
            ValueError: If the email does not conform to the expected format.
        """
        if not isinstance(email, str):
            raise TypeError(f"Invalid input: {email!r}. Email must be a string.")

        email = email.strip().lower()
        if not re.fullmatch(r"^[^@\s]+@[^@\s]+\.[^@\s]+$", email):
            raise ValueError(
                "Invalid input. Email must be a valid address with one @ and a domain."
            )
        return email

    @staticmethod
    def validate_grade_level_input(grade_level: Any) -> GradeLevel:
        try:
            return GradeLevel(grade_level)
        except ValueError:
            options = ", ".join(level.value for level in GradeLevel)
            raise ValueError(
                f"Invalid input. Grade level must be one of: {options}."
            ) from None

    @staticmethod
    def validate_status_input(status: Any) -> StudentStatus:
        try:
            return StudentStatus(status)
        except ValueError:
            options = ", ".join(s.value for s in StudentStatus)
            raise ValueError(
                f"Invalid input. Status must be one of: {options}."
            ) from None
