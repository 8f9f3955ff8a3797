# tests/conftest.py

import datetime

import pytest

from models.assignment import Assignment
from models.attendance import AttendanceRecord, AttendanceStatus
from models.communication import Communication
from models.grade import Grade
from models.record_store import RecordStore
from models.student import GradeLevel, Student, StudentStatus


@pytest.fixture
def sample_store():
    return RecordStore()


@pytest.fixture
def sample_date():
    # a Wednesday
    return datetime.date(2025, 9, 17)


@pytest.fixture
def sample_student():
    return Student(
        id=7,
        first_name="Sean",
        last_name="Cameron",
        grade_level=GradeLevel.TENTH,
        email="scameron@mmm.edu",
        date_enrolled=datetime.date(2025, 8, 25),
        parent_name="Pat Cameron",
        parent_email="pcameron@mmm.edu",
        parent_phone="555-0100",
    )


@pytest.fixture
def sample_assignment():
    due_date = datetime.datetime.strptime("2025-09-19 23:59", "%Y-%m-%d %H:%M")
    return Assignment(
        id=1,
        title="Unit 1 Quiz",
        points=100,
        weight=1,
        category="Quiz",
        due_date=due_date,
    )


@pytest.fixture
def sample_grade():
    return Grade(id=None, student_id=7, assignment_id=1, score=85)


@pytest.fixture
def sample_attendance_record(sample_date):
    return AttendanceRecord(
        id=None, student_id=7, date=sample_date, status=AttendanceStatus.PRESENT
    )


@pytest.fixture
def sample_communication(sample_date):
    return Communication(
        id=None,
        student_id=7,
        type="email",
        subject="Missing homework",
        date=sample_date,
        notes="Sent reminder about Unit 1 packet.",
    )


@pytest.fixture
def sample_student_roster():
    return [
        Student(1, "Ada", "Lovelace", GradeLevel.NINTH),
        Student(2, "Alan", "Turing", GradeLevel.NINTH),
        Student(3, "Grace", "Hopper", GradeLevel.ELEVENTH),
        Student(4, "Edsger", "Dijkstra", GradeLevel.TWELFTH, StudentStatus.GRADUATED),
        Student(5, "Barbara", "Liskov", GradeLevel.ELEVENTH, StudentStatus.INACTIVE),
    ]


@pytest.fixture
def sample_assignments():
    return [
        Assignment(1, "Homework 1", points=50, weight=1),
        Assignment(2, "Midterm", points=100, weight=3),
        Assignment(3, "Ungraded Survey", points=0, weight=1),
    ]


@pytest.fixture
def populated_store(
    sample_store, sample_student_roster, sample_assignments, sample_date
):
    store = sample_store

    for student in sample_student_roster:
        store.create_record(student)

    for assignment in sample_assignments:
        store.create_record(assignment)

    for student_id, assignment_id, score in [
        (1, 1, 45),
        (1, 2, 90),
        (2, 1, 30),
        (3, 2, 72),
    ]:
        store.create_record(Grade(None, student_id, assignment_id, score))

    for student_id, status in [
        (1, AttendanceStatus.PRESENT),
        (2, AttendanceStatus.LATE),
        (3, AttendanceStatus.PRESENT),
    ]:
        store.create_record(AttendanceRecord(None, student_id, sample_date, status))

    return store
