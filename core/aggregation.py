# core/aggregation.py

"""
Derived metrics for the classroom dashboard.

Every function here is pure: it reads snapshots of students, assignments, grades, and attendance
records, and returns new values without mutating its inputs or touching the record store.

Two empty-input conventions coexist and callers rely on both:
    - Grade averages return None ("no data") when there is nothing to average.
    - Attendance rates return 0 when there are no records.

Grades whose assignment cannot be resolved, or whose assignment has no positive points, are
skipped rather than raising, so one bad record never blanks out a whole report. Invalid
parameters (non-integer ids, malformed dates, bad window sizes) raise immediately.
"""

from __future__ import annotations

import datetime
import logging
import math
from collections import Counter, defaultdict
from collections.abc import Iterable, Sequence
from typing import Any

from core.utils import normalize_date, normalize_id
from models.assignment import Assignment
from models.attendance import AttendanceRecord, AttendanceStatus
from models.grade import Grade, LetterGrade
from models.student import GradeLevel, Student, StudentStatus

logger = logging.getLogger(__name__)

GRADE_LEVELS: tuple[str, ...] = tuple(level.value for level in GradeLevel)

# lower bound (inclusive) of each bucket, checked in order
LETTER_THRESHOLDS: tuple[tuple[float, LetterGrade], ...] = (
    (90, LetterGrade.A),
    (80, LetterGrade.B),
    (70, LetterGrade.C),
    (60, LetterGrade.D),
)

DISTRIBUTION_ORDER: tuple[LetterGrade, ...] = (
    LetterGrade.A,
    LetterGrade.B,
    LetterGrade.C,
    LetterGrade.D,
    LetterGrade.F,
)


# === helper methods ===


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _rate(present: int, total: int) -> int:
    return round_half_up(100 * present / total) if total else 0


def _index_by_id(records: Iterable[Assignment]) -> dict[int, Assignment]:
    # first record wins for duplicate ids, matching a find-first lookup
    index: dict[int, Assignment] = {}
    for record in records:
        index.setdefault(record.id, record)
    return index


def _gradable_percentages(
    grades: Iterable[Grade], assignment_index: dict[int, Assignment]
) -> list[float]:
    percentages = []

    for grade in grades:
        assignment = assignment_index.get(grade.assignment_id)
        value = percentage(grade.score, assignment.points if assignment else None)

        if value is None:
            if grade.score is not None:
                logger.debug(
                    "Skipping grade %s: assignment unresolved or ungradable.", grade.id
                )
            continue

        percentages.append(value)

    return percentages


def _require_count(value: Any, label: str, minimum: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"Invalid {label}: {value!r}. Expected an integer.")

    if value < minimum:
        raise ValueError(f"Invalid {label}: {value}. Must be at least {minimum}.")

    return value


# === grades ===


def percentage(score: float | None, points: float | None) -> float | None:
    """
    Normalizes a raw score to a percentage of the assignment's points.

    Returns None if the score is ungraded or the points are missing or not positive.
    Scores are not clamped, so results below 0 or above 100 are possible.
    """
    if score is None or points is None or points <= 0:
        return None

    return score / points * 100


def weighted_average(
    student_id: int, grades: Sequence[Grade], assignments: Sequence[Assignment]
) -> int | None:
    """
    Computes a student's weighted grade average as a rounded percentage.

    Args:
        student_id (int): The student whose grades are averaged.
        grades (Sequence[Grade]): The full grades collection.
        assignments (Sequence[Assignment]): The full assignments collection.

    Returns:
        The rounded weighted average, or None if the student has no graded work carrying weight.

    Raises:
        TypeError: If `student_id` is not an integer id.

    Notes:
        - Ungraded scores (None) are excluded rather than counted as zero.
        - Grades whose assignment is missing or has no positive points are skipped.
        - The result is `round(100 * sum(score / points * weight) / sum(weight))`, rounding half up.
    """
    student_id = normalize_id(student_id)
    return _weighted_average(
        (g for g in grades if g.student_id == student_id), _index_by_id(assignments)
    )


def _weighted_average(
    grades: Iterable[Grade], assignment_index: dict[int, Assignment]
) -> int | None:
    total = 0.0
    total_weight = 0.0

    for grade in grades:
        if grade.score is None:
            continue

        assignment = assignment_index.get(grade.assignment_id)

        if assignment is None or not assignment.is_gradable:
            logger.debug(
                "Skipping grade %s: assignment unresolved or ungradable.", grade.id
            )
            continue

        total += grade.score / assignment.points * assignment.weight
        total_weight += assignment.weight

    if total_weight == 0:
        return None

    return round_half_up(100 * total / total_weight)


def letter_grade(value: float | None) -> LetterGrade:
    """
    Maps a percentage to its letter-grade bucket.

    Lower bounds are inclusive: 90 is an A, 89.99 is a B. None maps to `LetterGrade.UNGRADED`,
    never to F.
    """
    if value is None:
        return LetterGrade.UNGRADED

    for threshold, letter in LETTER_THRESHOLDS:
        if value >= threshold:
            return letter

    return LetterGrade.F


def letter_grade_for_score(
    score: float | None, max_points: float | None
) -> LetterGrade:
    return letter_grade(percentage(score, max_points))


def score_for(
    student_id: int, assignment_id: int, grades: Sequence[Grade]
) -> float | None:
    """Returns the first matching grade's score for a grade book cell, or None if there is none."""
    student_id = normalize_id(student_id)
    assignment_id = normalize_id(assignment_id)

    for grade in grades:
        if grade.student_id == student_id and grade.assignment_id == assignment_id:
            return grade.score

    return None


def grade_distribution(
    grades: Sequence[Grade], assignments: Sequence[Assignment]
) -> dict[LetterGrade, int]:
    """
    Counts every gradable record by letter grade.

    Each grade is bucketed by its own score/points percentage, not by the student's overall
    average. Keys are always present and ordered A, B, C, D, F; the counts sum to the number of
    gradable records (non-null score, resolvable assignment with positive points).
    """
    distribution = {letter: 0 for letter in DISTRIBUTION_ORDER}

    for value in _gradable_percentages(grades, _index_by_id(assignments)):
        distribution[letter_grade(value)] += 1

    return distribution


# === attendance ===


def attendance_rate(student_id: int, attendance: Sequence[AttendanceRecord]) -> int:
    """
    Computes the percentage of a student's attendance records marked present.

    Late, excused, and absent records all count against the rate. A student with no records
    has a rate of 0, not None.
    """
    student_id = normalize_id(student_id)
    records = [a for a in attendance if a.student_id == student_id]

    return _rate(sum(1 for a in records if a.is_present), len(records))


def attendance_status_on(
    student_id: int, day: Any, attendance: Sequence[AttendanceRecord]
) -> AttendanceStatus:
    """
    Looks up a student's attendance status for one calendar day.

    Returns the first matching record's status, or `AttendanceStatus.ABSENT` if no record exists.
    """
    student_id = normalize_id(student_id)
    day = normalize_date(day)

    for record in attendance:
        if record.student_id == student_id and record.date == day:
            return record.status

    return AttendanceStatus.ABSENT


def week_days(anchor: Any) -> list[datetime.date]:
    """Returns the Monday through Sunday of the week containing `anchor`."""
    anchor = normalize_date(anchor)
    monday = anchor - datetime.timedelta(days=anchor.weekday())

    return [monday + datetime.timedelta(days=offset) for offset in range(7)]


def weekly_grid(
    anchor: Any,
    students: Sequence[Student],
    attendance: Sequence[AttendanceRecord],
) -> dict[str, Any]:
    """
    Assembles the weekly attendance grid for the week containing `anchor`.

    Args:
        anchor (date | datetime | str): Any day in the week to display.
        students (Sequence[Student]): The students to show, in display order.
        attendance (Sequence[AttendanceRecord]): The full attendance collection.

    Returns:
        dict: A grid with the following keys:
            - "days" (list[datetime.date]): The seven days, Monday first.
            - "rows" (list[dict]): One row per student, each with:
                - "student" (Student): The student.
                - "statuses" (list[AttendanceStatus]): Seven statuses aligned with "days".
                - "rate" (int): The student's attendance rate over their entire history.

    Notes:
        - Cells are week-scoped, but the rate column is computed over all of the student's records.
        - Days without a record show as absent.
    """
    days = week_days(anchor)

    statuses: dict[tuple[int, datetime.date], AttendanceStatus] = {}
    totals: Counter[int] = Counter()
    present: Counter[int] = Counter()

    for record in attendance:
        statuses.setdefault((record.student_id, record.date), record.status)
        totals[record.student_id] += 1
        if record.is_present:
            present[record.student_id] += 1

    rows = [
        {
            "student": student,
            "statuses": [
                statuses.get((student.id, day), AttendanceStatus.ABSENT)
                for day in days
            ],
            "rate": _rate(present[student.id], totals[student.id]),
        }
        for student in students
    ]

    return {"days": days, "rows": rows}


def attendance_trend(
    today: Any, attendance: Sequence[AttendanceRecord], window: int = 7
) -> list[tuple[datetime.date, int]]:
    """
    Computes the class-wide attendance rate for each of the last `window` days.

    Args:
        today (date | datetime | str): The last day of the window (inclusive).
        attendance (Sequence[AttendanceRecord]): The full attendance collection.
        window (int): The number of days to include. Defaults to 7.

    Returns:
        A list of (day, rate) pairs, oldest first. Days without records have a rate of 0.

    Raises:
        TypeError: If `window` is not an integer.
        ValueError: If `window` is less than 1 or `today` is not a valid date.
    """
    today = normalize_date(today)
    window = _require_count(window, "window", 1)

    totals: Counter[datetime.date] = Counter()
    present: Counter[datetime.date] = Counter()

    for record in attendance:
        totals[record.date] += 1
        if record.is_present:
            present[record.date] += 1

    days = [
        today - datetime.timedelta(days=offset)
        for offset in range(window - 1, -1, -1)
    ]

    return [(day, _rate(present[day], totals[day])) for day in days]


# === reports ===


def grade_level_rollups(
    students: Sequence[Student],
    grades: Sequence[Grade],
    assignments: Sequence[Assignment],
    attendance: Sequence[AttendanceRecord],
    grade_levels: Sequence[str] = GRADE_LEVELS,
) -> list[dict[str, Any]]:
    """
    Summarizes grades and attendance per grade level.

    Args:
        students (Sequence[Student]): The full student roster.
        grades (Sequence[Grade]): The full grades collection.
        assignments (Sequence[Assignment]): The full assignments collection.
        attendance (Sequence[AttendanceRecord]): The full attendance collection.
        grade_levels (Sequence[str]): The levels to report, in output order.

    Returns:
        list[dict]: One entry per level with the following keys:
            - "grade_level" (str): The level label.
            - "average" (int): The rounded mean of per-record percentages across the level's gradable grades.
            - "attendance_rate" (int): The share of the level's attendance records marked present.

    Notes:
        - The average is flattened across records, not a mean of per-student averages, and ignores weights.
        - Levels with no matching records report 0 for both values.
    """
    assignment_index = _index_by_id(assignments)
    level_by_student = {s.id: s.grade_level.value for s in students}

    level_grades: defaultdict[str, list[Grade]] = defaultdict(list)
    for grade in grades:
        level = level_by_student.get(grade.student_id)
        if level is not None:
            level_grades[level].append(grade)

    level_attendance: defaultdict[str, list[AttendanceRecord]] = defaultdict(list)
    for record in attendance:
        level = level_by_student.get(record.student_id)
        if level is not None:
            level_attendance[level].append(record)

    rollups = []

    for level in grade_levels:
        level = Student.validate_grade_level_input(level).value
        percentages = _gradable_percentages(level_grades[level], assignment_index)
        records = level_attendance[level]

        rollups.append(
            {
                "grade_level": level,
                "average": (
                    round_half_up(sum(percentages) / len(percentages))
                    if percentages
                    else 0
                ),
                "attendance_rate": _rate(
                    sum(1 for r in records if r.is_present), len(records)
                ),
            }
        )

    return rollups


def top_performers(
    students: Sequence[Student],
    grades: Sequence[Grade],
    assignments: Sequence[Assignment],
    n: int = 5,
) -> list[tuple[Student, int]]:
    """
    Ranks students by weighted average and returns the first `n`.

    Students with no data or a non-positive average are excluded. Ties keep roster order.

    Raises:
        TypeError: If `n` is not an integer.
        ValueError: If `n` is negative.
    """
    n = _require_count(n, "n", 0)
    assignment_index = _index_by_id(assignments)

    grades_by_student: defaultdict[int, list[Grade]] = defaultdict(list)
    for grade in grades:
        grades_by_student[grade.student_id].append(grade)

    ranked = []
    for student in students:
        average = _weighted_average(grades_by_student[student.id], assignment_index)
        if average is not None and average > 0:
            ranked.append((student, average))

    ranked.sort(key=lambda pair: pair[1], reverse=True)

    return ranked[:n]


def dashboard_summary(
    students: Sequence[Student],
    grades: Sequence[Grade],
    assignments: Sequence[Assignment],
    attendance: Sequence[AttendanceRecord],
) -> dict[str, int]:
    """
    Computes the headline numbers shown on the dashboard.

    Returns:
        dict: A summary with the following keys:
            - "active_students" (int): Students whose status is Active.
            - "class_average" (int): Rounded mean of per-record percentages over all gradable grades, 0 if none.
            - "attendance_rate" (int): Share of all attendance records marked present, 0 if none.
            - "total_assignments" (int): Number of assignments.
    """
    percentages = _gradable_percentages(grades, _index_by_id(assignments))

    return {
        "active_students": sum(1 for s in students if s.status == StudentStatus.ACTIVE),
        "class_average": (
            round_half_up(sum(percentages) / len(percentages)) if percentages else 0
        ),
        "attendance_rate": _rate(
            sum(1 for a in attendance if a.is_present), len(attendance)
        ),
        "total_assignments": len(assignments),
    }
