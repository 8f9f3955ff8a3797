# models/types.py

"""
Holds TypeVar definition for simplifying type checks.
"""

from typing import TypeVar

from .assignment import Assignment
from .attendance import AttendanceRecord
from .communication import Communication
from .grade import Grade
from .student import Student

RecordType = TypeVar(
    "RecordType", Student, Assignment, Grade, AttendanceRecord, Communication
)
