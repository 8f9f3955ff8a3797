# models/record_store.py

"""
The RecordStore is the in-memory repository behind the dashboard and the source of every snapshot the
aggregation engine reads.

Students, Assignments, Grades, AttendanceRecords, and Communications are stored in dictionaries keyed by
integer id. Every public method returns a `Response` and never raises. Records handed out by the store are
copies, made by round-tripping through `to_dict()` / `from_dict()`, so callers can mutate them freely
without leaking changes back into the store (or between test cases).

Provides list/get/create/update/delete for every record type, cascading deletes for linked records,
convenience queries by student, and `snapshot()` for the aggregation engine.
"""

from __future__ import annotations

import datetime
import logging
from typing import Any, Callable

from core.response import ErrorCode, Response
from core.utils import next_record_id, normalize_id
from models.assignment import Assignment
from models.attendance import AttendanceRecord
from models.communication import Communication
from models.grade import Grade
from models.student import Student
from models.types import RecordType

logger = logging.getLogger(__name__)


class RecordStore:
    _tracking_maps: dict[type, str] = {
        Student: "_students",
        Assignment: "_assignments",
        Grade: "_grades",
        AttendanceRecord: "_attendance",
        Communication: "_communications",
    }

    def __init__(self):
        self._students: dict[int, Student] = {}
        self._assignments: dict[int, Assignment] = {}
        self._grades: dict[int, Grade] = {}
        self._attendance: dict[int, AttendanceRecord] = {}
        self._communications: dict[int, Communication] = {}

    # === data accessors ===

    def list_records(
        self,
        record_type: type[RecordType],
        predicate: Callable[[RecordType], bool] | None = None,
    ) -> Response:
        """
        Fetches copies of every record of a given type, optionally filtered by a predicate.

        Args:
            record_type (type[RecordType]): The model class to list (e.g. `Student`).
            predicate (Callable[[RecordType], bool] | None): Optional filter function. If omitted, all records are returned.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the operation succeeded, even if no records were found.
                    - False if the record type is not tracked or for unexpected errors.
                - detail (str | None):
                    - On failure, a human-readable description of the error.
                    - On success, None.
                - error (ErrorCode | None):
                    - `ErrorCode.INVALID_FIELD_VALUE` if the record type is not tracked.
                    - `ErrorCode.INTERNAL_ERROR` for unexpected errors.
                - status_code (int | None):
                    - 200 on success
                    - 400 on failure
                - data (dict): Payload with the following keys:
                    - On success:
                        - "records" (list[RecordType]): Copies of the matching records in id order (may be empty).

        Notes:
            - This method is read-only and never raises.
            - The predicate is applied to the stored records; only the results are copied.
        """
        try:
            dictionary = self._get_tracking_dict(record_type)
            records = [
                self._copy(record)
                for _, record in sorted(dictionary.items())
                if predicate is None or predicate(record)
            ]

        except TypeError as e:
            return Response.fail(
                detail=f"Invalid record type: {e}",
                error=ErrorCode.INVALID_FIELD_VALUE,
            )

        except Exception as e:
            return Response.fail(
                detail=f"Unexpected error: {e}",
                error=ErrorCode.INTERNAL_ERROR,
            )

        else:
            return Response.succeed(data={"records": records})

    def get_record(self, record_type: type[RecordType], record_id: Any) -> Response:
        """
        Finds a record by id.

        Args:
            record_type (type[RecordType]): The model class to search.
            record_id (Any): The record id, as an int or a string of digits.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the record was found.
                    - False if no match is found or the id is malformed.
                - detail (str | None):
                    - On failure, a human-readable explanation of the problem.
                - error (ErrorCode | None):
                    - `ErrorCode.NOT_FOUND` if no match is found.
                    - `ErrorCode.INVALID_FIELD_VALUE` if the id or record type is invalid.
                - status_code (int | None):
                    - 200 on success
                    - 404 if not found
                    - 400 for other failures
                - data (dict): Payload with the following keys:
                    - On success:
                        - "record" (RecordType): A copy of the matched record.

        Notes:
            - This method is read-only and does not raise.
        """
        try:
            record_id = normalize_id(record_id)
            record = self._get_tracking_dict(record_type).get(record_id)

        except TypeError as e:
            return Response.fail(
                detail=f"Invalid lookup: {e}",
                error=ErrorCode.INVALID_FIELD_VALUE,
            )

        if record is None:
            return Response.not_found(
                f"No matching {record_type.__name__} found for id {record_id}."
            )

        return Response.succeed(data={"record": self._copy(record)})

    # --- student-scoped queries ---

    def grades_for_student(self, student_id: Any) -> Response:
        return self._records_for_student(Grade, student_id)

    def attendance_for_student(self, student_id: Any) -> Response:
        return self._records_for_student(AttendanceRecord, student_id)

    def communications_for_student(self, student_id: Any) -> Response:
        """
        Fetches a student's parent-contact log, most recent first.

        Returns:
            Response: On success, "records" (list[Communication]) sorted by date descending.
            Fails with `ErrorCode.NOT_FOUND` if the student is not on the roster.
        """
        response = self._records_for_student(Communication, student_id)

        if not response.success:
            return response

        records = sorted(
            response.data["records"], key=lambda c: c.date, reverse=True
        )

        return Response.succeed(data={"records": records})

    def _records_for_student(
        self, record_type: type[RecordType], student_id: Any
    ) -> Response:
        student_response = self.get_record(Student, student_id)

        if not student_response.success:
            return Response.fail(
                detail=f"Could not resolve student: {student_response.detail}",
                error=student_response.error,
            )

        student_id = student_response.data["record"].id

        return self.list_records(record_type, lambda r: r.student_id == student_id)

    def snapshot(self) -> Response:
        """
        Produces copies of the four collections consumed by the aggregation engine.

        Returns:
            Response: A structured response with the following contract:
                - success (bool): True unless an unexpected error occurs.
                - data (dict): Payload with the following keys:
                    - "students" (list[Student])
                    - "assignments" (list[Assignment])
                    - "grades" (list[Grade])
                    - "attendance" (list[AttendanceRecord])

        Notes:
            - The snapshot is detached from the store; later mutations do not affect it.
        """
        data = {}

        for key, record_type in (
            ("students", Student),
            ("assignments", Assignment),
            ("grades", Grade),
            ("attendance", AttendanceRecord),
        ):
            response = self.list_records(record_type)

            if not response.success:
                return response

            data[key] = response.data["records"]

        return Response.succeed(data=data)

    # === data manipulators ===

    def create_record(self, record: RecordType) -> Response:
        """
        Adds a record to the store, assigning the next integer id if the record has none.

        Args:
            record (RecordType): The record to be added.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the record was added.
                    - False if a linked record is missing, the record violates a uniqueness rule, or the id is taken.
                - detail (str | None):
                    - On failure, a human-readable description of the error.
                    - On success, a simple confirmation message.
                - error (ErrorCode | None):
                    - `ErrorCode.NOT_FOUND` if a linked student or assignment cannot be found.
                    - `ErrorCode.VALIDATION_FAILED` if the id is taken or the record duplicates an existing one.
                    - `ErrorCode.INVALID_FIELD_VALUE` if the record type is not tracked.
                    - `ErrorCode.INTERNAL_ERROR` for unexpected errors.
                - status_code (int | None):
                    - 200 on success
                    - 404 if a linked record cannot be found
                    - 400 for other failures
                - data (dict): Payload with the following keys:
                    - On success:
                        - "record" (RecordType): A copy of the stored record, including its assigned id.

        Notes:
            - This method mutates store state.
            - The caller's object is never stored; later changes to it do not affect the store.
            - Grades must reference an existing student and assignment, and only one grade may exist per pair.
            - Attendance records must reference an existing student, and only one record may exist per student per day.
            - Communications must reference an existing student.
        """
        try:
            dictionary = self._get_tracking_dict(type(record))

        except TypeError as e:
            return Response.fail(
                detail=f"Invalid record type: {e}",
                error=ErrorCode.INVALID_FIELD_VALUE,
            )

        link_response = self._check_links(record)

        if not link_response.success:
            logger.warning("Rejected %r: %s", record, link_response.detail)
            return link_response

        try:
            self.require_unique_record(record)

            payload = record.to_dict()

            if payload["id"] is None:
                payload["id"] = next_record_id(dictionary.keys())

            elif payload["id"] in dictionary:
                raise ValueError(f"A record with id {payload['id']} already exists.")

            stored = type(record).from_dict(payload)

        except ValueError as e:
            logger.warning("Rejected %r: %s", record, e)
            return Response.fail(
                detail=f"Unique record validation failed: {e}",
                error=ErrorCode.VALIDATION_FAILED,
            )

        except Exception as e:
            return Response.fail(
                detail=f"Unexpected error: {e}",
                error=ErrorCode.INTERNAL_ERROR,
            )

        else:
            dictionary[stored.id] = stored
            logger.debug("Created %r", stored)

            return Response.succeed(
                detail=f"{type(record).__name__} successfully added to the store.",
                data={"record": self._copy(stored)},
            )

    def update_record(
        self, record_type: type[RecordType], record_id: Any, fields: dict[str, Any]
    ) -> Response:
        """
        Updates fields of a stored record.

        Args:
            record_type (type[RecordType]): The model class of the record.
            record_id (Any): The id of the record to update.
            fields (dict[str, Any]): New values keyed by storage field name (e.g. "first_name", "grade_level").

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the record was updated.
                    - False if the record is not found, a field is unknown or invalid, or the update breaks a uniqueness rule.
                - detail (str | None):
                    - On failure, a human-readable description of the error.
                    - On success, a simple confirmation message.
                - error (ErrorCode | None):
                    - `ErrorCode.NOT_FOUND` if the record or a newly linked record cannot be found.
                    - `ErrorCode.INVALID_FIELD_VALUE` if a field is unknown, read-only, or fails validation.
                    - `ErrorCode.MISSING_REQUIRED_FIELD` if a required field is missing from the rebuilt record.
                    - `ErrorCode.VALIDATION_FAILED` if the update duplicates an existing record.
                    - `ErrorCode.INTERNAL_ERROR` for unexpected errors.
                - status_code (int):
                    - 200 on success
                    - 404 if a record cannot be found
                    - 409 if the update duplicates an existing record
                    - 400 for invalid input, 500 for unexpected errors
                - data (dict): Payload with the following keys:
                    - On success:
                        - "record" (RecordType): A copy of the updated record.

        Notes:
            - This method mutates store state only if every field validates; partial updates are never applied.
            - The "id" field is read-only.
        """
        lookup_response = self.get_record(record_type, record_id)

        if not lookup_response.success:
            return lookup_response

        current = lookup_response.data["record"]
        payload = current.to_dict()

        unknown = sorted(set(fields) - set(payload))
        if unknown:
            return Response.fail(
                detail=f"Unknown field(s) for {record_type.__name__}: {', '.join(unknown)}.",
                error=ErrorCode.INVALID_FIELD_VALUE,
            )

        if "id" in fields:
            try:
                same_id = normalize_id(fields["id"]) == current.id

            except TypeError:
                same_id = False

            if not same_id:
                return Response.fail(
                    detail="Record ids cannot be changed.",
                    error=ErrorCode.INVALID_FIELD_VALUE,
                )

        try:
            updated = record_type.from_dict({**payload, **fields})

        except KeyError as e:
            return Response.fail(
                detail=f"Missing required field: {e}",
                error=ErrorCode.MISSING_REQUIRED_FIELD,
            )

        except (TypeError, ValueError) as e:
            return Response.fail(
                detail=f"Invalid field value: {e}",
                error=ErrorCode.INVALID_FIELD_VALUE,
            )

        except Exception as e:
            return Response.fail(
                detail=f"Unexpected error: {e}",
                error=ErrorCode.INTERNAL_ERROR,
            )

        link_response = self._check_links(updated)

        if not link_response.success:
            return link_response

        try:
            self.require_unique_record(updated)

        except ValueError as e:
            return Response.fail(
                detail=f"Unique record validation failed: {e}",
                error=ErrorCode.VALIDATION_FAILED,
            )

        self._get_tracking_dict(record_type)[updated.id] = updated
        logger.debug("Updated %r", updated)

        return Response.succeed(
            detail=f"{record_type.__name__} successfully updated.",
            data={"record": self._copy(updated)},
        )

    def update_parent_contact(
        self,
        student_id: Any,
        parent_name: str,
        parent_email: str,
        parent_phone: str,
    ) -> Response:
        return self.update_record(
            Student,
            student_id,
            {
                "parent_name": parent_name,
                "parent_email": parent_email,
                "parent_phone": parent_phone,
            },
        )

    def delete_record(self, record_type: type[RecordType], record_id: Any) -> Response:
        """
        Removes a record and every record linked to it.

        Args:
            record_type (type[RecordType]): The model class of the record.
            record_id (Any): The id of the record to remove.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the record and its linked records were removed.
                    - False if the record cannot be found or the id is malformed.
                - detail (str | None):
                    - On failure, a human-readable description of the error.
                    - On success, a confirmation message including the number of linked records removed.
                - error (ErrorCode | None):
                    - `ErrorCode.NOT_FOUND` if the record cannot be found.
                    - `ErrorCode.INVALID_FIELD_VALUE` if the id or record type is invalid.
                - status_code (int | None):
                    - 200 on success
                    - 404 if the record cannot be found
                    - 400 for other failures
                - data (dict): Payload with the following keys:
                    - On success:
                        - "removed_links" (int): The number of linked records removed.

        Notes:
            - Deleting a student removes their grades, attendance records, and communications.
            - Deleting an assignment removes its grades.
            - Linked records are removed first to maintain referential integrity.
        """
        lookup_response = self.get_record(record_type, record_id)

        if not lookup_response.success:
            return lookup_response

        record_id = lookup_response.data["record"].id

        if record_type is Student:
            linked = [
                (self._grades, lambda r: r.student_id == record_id),
                (self._attendance, lambda r: r.student_id == record_id),
                (self._communications, lambda r: r.student_id == record_id),
            ]
        elif record_type is Assignment:
            linked = [(self._grades, lambda r: r.assignment_id == record_id)]
        else:
            linked = []

        removed_links = 0

        for dictionary, predicate in linked:
            for linked_id in [i for i, r in dictionary.items() if predicate(r)]:
                del dictionary[linked_id]
                removed_links += 1

        del self._get_tracking_dict(record_type)[record_id]
        logger.debug(
            "Deleted %s %s and %d linked record(s)",
            record_type.__name__,
            record_id,
            removed_links,
        )

        return Response.succeed(
            detail=f"{record_type.__name__} successfully removed ({removed_links} linked record(s) removed).",
            data={"removed_links": removed_links},
        )

    # === data validators ===

    def _check_links(self, record: RecordType) -> Response:
        """
        Verifies that the students and assignments a record references exist.

        Returns:
            Response: Success with no payload, or a `NOT_FOUND` failure naming the missing link.
        """
        if isinstance(record, (Grade, AttendanceRecord, Communication)):
            if record.student_id not in self._students:
                return Response.not_found(
                    f"Could not resolve student for {type(record).__name__}: no student with id {record.student_id}."
                )

        if isinstance(record, Grade) and record.assignment_id not in self._assignments:
            return Response.not_found(
                f"Could not resolve assignment for grade: no assignment with id {record.assignment_id}."
            )

        return Response.succeed()

    def require_unique_record(self, record: RecordType) -> None:
        """
        Validates that a record does not duplicate an existing one.

        Args:
            record (RecordType): The new or updated record.

        Raises:
            ValueError: If a grade already exists for the same student and assignment, or an attendance record
                already exists for the same student and day.

        Notes:
            - The record's own id is ignored, so updates can be validated against the rest of the store.
        """
        if isinstance(record, Grade):
            self.require_unique_grade(record.student_id, record.assignment_id, record.id)

        elif isinstance(record, AttendanceRecord):
            self.require_unique_attendance(record.student_id, record.date, record.id)

    def require_unique_grade(
        self, student_id: int, assignment_id: int, exclude_id: int | None = None
    ) -> None:
        if any(
            g.student_id == student_id
            and g.assignment_id == assignment_id
            and g.id != exclude_id
            for g in self._grades.values()
        ):
            raise ValueError(
                "A grade for the same student and assignment already exists."
            )

    def require_unique_attendance(
        self, student_id: int, date: datetime.date, exclude_id: int | None = None
    ) -> None:
        if any(
            a.student_id == student_id and a.date == date and a.id != exclude_id
            for a in self._attendance.values()
        ):
            raise ValueError(
                f"An attendance record for this student on {date.isoformat()} already exists."
            )

    # === helper methods ===

    def _get_tracking_dict(self, record_type: type) -> dict[int, Any]:
        """
        Return the internal tracking dictionary corresponding to the given record type.

        Raises:
            TypeError: If the record type is not recognized.
        """
        try:
            attr_name = self._tracking_maps[record_type]

            return getattr(self, attr_name)

        except KeyError:
            raise TypeError(f"Unrecognized record type: {record_type}") from None

    @staticmethod
    def _copy(record: RecordType) -> RecordType:
        return type(record).from_dict(record.to_dict())
