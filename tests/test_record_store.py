# tests/test_record_store.py

import datetime

from core.response import ErrorCode
from models.assignment import Assignment
from models.attendance import AttendanceRecord, AttendanceStatus
from models.communication import Communication
from models.grade import Grade
from models.student import GradeLevel, Student

# === data manipulators ===

# --- create ---


def test_create_student_assigns_next_id(sample_store):
    store = sample_store

    response = store.create_record(Student(None, "Ada", "Lovelace", "9th Grade"))
    assert response.success
    assert response.data["record"].id == 1

    response = store.create_record(Student(None, "Alan", "Turing", "9th Grade"))
    assert response.data["record"].id == 2


def test_create_keeps_explicit_id(sample_store, sample_student):
    response = sample_store.create_record(sample_student)
    assert response.success
    assert response.data["record"].id == 7
    assert sample_store.get_record(Student, 7).success


def test_create_rejects_taken_id(sample_store, sample_student):
    sample_store.create_record(sample_student)

    response = sample_store.create_record(sample_student)
    assert not response.success
    assert response.error == ErrorCode.VALIDATION_FAILED


def test_create_stores_a_copy(sample_store, sample_student):
    sample_store.create_record(sample_student)

    sample_student.first_name = "Paul"

    response = sample_store.get_record(Student, 7)
    assert response.data["record"].first_name == "Sean"


def test_create_grade_requires_links(
    sample_store, sample_student, sample_assignment, sample_grade
):
    store = sample_store

    response = store.create_record(sample_grade)
    assert not response.success
    assert response.error == ErrorCode.NOT_FOUND
    assert response.status_code == 404

    store.create_record(sample_student)
    response = store.create_record(sample_grade)
    assert not response.success
    assert response.error == ErrorCode.NOT_FOUND

    store.create_record(sample_assignment)
    response = store.create_record(sample_grade)
    assert response.success
    assert response.data["record"].score == 85.0


def test_create_grade_rejects_duplicate_pair(
    sample_store, sample_student, sample_assignment, sample_grade
):
    store = sample_store
    store.create_record(sample_student)
    store.create_record(sample_assignment)
    store.create_record(sample_grade)

    response = store.create_record(Grade(None, 7, 1, 90))
    assert not response.success
    assert response.error == ErrorCode.VALIDATION_FAILED


def test_create_attendance_rejects_same_day(
    sample_store, sample_student, sample_attendance_record, sample_date
):
    store = sample_store
    store.create_record(sample_student)

    response = store.create_record(sample_attendance_record)
    assert response.success

    response = store.create_record(
        AttendanceRecord(
            None,
            7,
            datetime.datetime.combine(sample_date, datetime.time(13, 0)),
            AttendanceStatus.LATE,
        )
    )
    assert not response.success
    assert response.error == ErrorCode.VALIDATION_FAILED


def test_create_rejects_untracked_type(sample_store):
    response = sample_store.create_record("not a record")
    assert not response.success
    assert response.error == ErrorCode.INVALID_FIELD_VALUE


# --- update ---


def test_update_student_fields(sample_store, sample_student):
    store = sample_store
    store.create_record(sample_student)

    response = store.update_record(
        Student, 7, {"first_name": "Paul", "grade_level": "11th Grade"}
    )
    assert response.success
    assert response.data["record"].first_name == "Paul"

    stored = store.get_record(Student, 7).data["record"]
    assert stored.first_name == "Paul"
    assert stored.grade_level == GradeLevel.ELEVENTH


def test_update_rejects_invalid_value_without_partial_write(
    sample_store, sample_student
):
    store = sample_store
    store.create_record(sample_student)

    response = store.update_record(
        Student, 7, {"first_name": "Paul", "grade_level": "13th Grade"}
    )
    assert not response.success
    assert response.error == ErrorCode.INVALID_FIELD_VALUE

    assert store.get_record(Student, 7).data["record"].first_name == "Sean"


def test_update_rejects_unknown_field_and_id_change(sample_store, sample_student):
    store = sample_store
    store.create_record(sample_student)

    response = store.update_record(Student, 7, {"nickname": "Seanie"})
    assert not response.success
    assert response.error == ErrorCode.INVALID_FIELD_VALUE

    response = store.update_record(Student, 7, {"id": 8})
    assert not response.success
    assert response.error == ErrorCode.INVALID_FIELD_VALUE


def test_update_missing_record(sample_store):
    response = sample_store.update_record(Student, 99, {"first_name": "Paul"})
    assert not response.success
    assert response.error == ErrorCode.NOT_FOUND


def test_update_rejects_non_string_email(sample_store, sample_student):
    store = sample_store
    store.create_record(sample_student)

    response = store.update_record(Student, 7, {"email": 5})
    assert not response.success
    assert response.error == ErrorCode.INVALID_FIELD_VALUE

    assert store.get_record(Student, 7).data["record"].email == "scameron@mmm.edu"


def test_update_accepts_matching_digit_string_id(sample_store, sample_student):
    store = sample_store
    store.create_record(sample_student)

    response = store.update_record(Student, 7, {"id": "7", "first_name": "Paul"})
    assert response.success
    assert response.data["record"].id == 7

    response = store.update_record(Student, 7, {"id": "seven"})
    assert not response.success
    assert response.error == ErrorCode.INVALID_FIELD_VALUE


def test_store_collections_are_not_exposed(populated_store):
    store = populated_store

    assert not hasattr(store, "students")
    assert not hasattr(store, "grades")

    records = store.list_records(Student).data["records"]
    records.clear()

    assert len(store.list_records(Student).data["records"]) == 5


def test_update_grade_score(
    sample_store, sample_student, sample_assignment, sample_grade
):
    store = sample_store
    store.create_record(sample_student)
    store.create_record(sample_assignment)
    grade_id = store.create_record(sample_grade).data["record"].id

    response = store.update_record(Grade, grade_id, {"score": None})
    assert response.success
    assert response.data["record"].score is None


def test_update_parent_contact(sample_store, sample_student):
    store = sample_store
    store.create_record(sample_student)

    response = store.update_parent_contact(
        7, "Alex Cameron", "alex@mmm.edu", "555-0199"
    )
    assert response.success

    student = store.get_record(Student, 7).data["record"]
    assert student.parent_name == "Alex Cameron"
    assert student.parent_email == "alex@mmm.edu"
    assert student.parent_phone == "555-0199"


# --- delete ---


def test_delete_student_cascades(populated_store):
    store = populated_store
    store.create_record(
        Communication(None, 1, "phone", "Great week", datetime.date(2025, 9, 15))
    )

    response = store.delete_record(Student, 1)
    assert response.success
    assert response.data["removed_links"] == 4

    assert store.get_record(Student, 1).error == ErrorCode.NOT_FOUND
    assert all(g.student_id != 1 for g in store.list_records(Grade).data["records"])
    assert all(
        a.student_id != 1 for a in store.list_records(AttendanceRecord).data["records"]
    )
    assert store.list_records(Communication).data["records"] == []


def test_delete_assignment_cascades(populated_store):
    store = populated_store

    response = store.delete_record(Assignment, 1)
    assert response.success
    assert response.data["removed_links"] == 2
    grades = store.list_records(Grade).data["records"]
    assert all(g.assignment_id != 1 for g in grades)


def test_delete_missing_record(sample_store):
    response = sample_store.delete_record(Student, 1)
    assert not response.success
    assert response.error == ErrorCode.NOT_FOUND


# === data accessors ===


def test_get_record(sample_store, sample_student):
    store = sample_store

    response = store.get_record(Student, 7)
    assert not response.success
    assert response.error == ErrorCode.NOT_FOUND

    store.create_record(sample_student)
    response = store.get_record(Student, "7")
    assert response.success
    assert response.data["record"].full_name == "Sean Cameron"


def test_get_record_rejects_malformed_id(sample_store):
    response = sample_store.get_record(Student, "seven")
    assert not response.success
    assert response.error == ErrorCode.INVALID_FIELD_VALUE


def test_get_record_returns_copy(sample_store, sample_student):
    store = sample_store
    store.create_record(sample_student)

    first = store.get_record(Student, 7).data["record"]
    first.last_name = "Atreides"

    assert store.get_record(Student, 7).data["record"].last_name == "Cameron"


def test_list_records_with_predicate(populated_store):
    response = populated_store.list_records(Student, lambda s: s.is_active)
    assert response.success
    assert [s.id for s in response.data["records"]] == [1, 2, 3]


def test_list_records_untracked_type(sample_store):
    response = sample_store.list_records(dict)
    assert not response.success
    assert response.error == ErrorCode.INVALID_FIELD_VALUE


def test_records_for_student(populated_store):
    store = populated_store

    response = store.grades_for_student(1)
    assert response.success
    assert [g.assignment_id for g in response.data["records"]] == [1, 2]

    response = store.attendance_for_student(2)
    assert response.success
    assert response.data["records"][0].status == AttendanceStatus.LATE

    response = store.grades_for_student(42)
    assert not response.success
    assert response.error == ErrorCode.NOT_FOUND


def test_communications_for_student_most_recent_first(populated_store):
    store = populated_store
    store.create_record(
        Communication(None, 3, "note", "Early note", datetime.date(2025, 9, 1))
    )
    store.create_record(
        Communication(None, 3, "meeting", "Conference", datetime.date(2025, 9, 10))
    )

    response = store.communications_for_student(3)
    assert response.success
    assert [c.subject for c in response.data["records"]] == ["Conference", "Early note"]


def test_snapshot_is_detached(populated_store):
    store = populated_store

    response = store.snapshot()
    assert response.success
    snapshot = response.data
    assert len(snapshot["students"]) == 5
    assert len(snapshot["assignments"]) == 3
    assert len(snapshot["grades"]) == 4
    assert len(snapshot["attendance"]) == 3

    store.delete_record(Student, 1)
    assert len(snapshot["students"]) == 5
    assert len(snapshot["grades"]) == 4
