"""Attendance analytics over a materialized list of attendance records.

``analyze`` makes one pass over the records to tally absences, early dismissals and
late arrivals per student, grade, month and weekday, then a second pass over the
per-student tallies to compute absence rates and flag chronic absenteeism, students
needing intervention and students on a long absence streak. It performs no I/O:
callers fetch the records and thresholds first and hand over the full lists.
"""
import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Any, Iterable, Optional

from app.models.analytics import (
    AnalyticsReport,
    DateRange,
    DayOfWeekBreakdown,
    GradeBreakdown,
    LateArrivalCounts,
    MonthBreakdown,
    RiskLevel,
    StudentMetrics,
)
from app.models.attendance import AttendanceStatus, RecordKind
from app.models.settings import AttendanceThresholds

logger = logging.getLogger(__name__)

INVALID_DATE = "Invalid Date"
SCHOOL_WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday")
_DAY_NAMES = SCHOOL_WEEKDAYS + ("Saturday", "Sunday")
_MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

ABSENCE_REASON = "Absences"
LATE_ARRIVAL_REASON = "Late Arrivals"


def classify_category(category: Optional[str]) -> RecordKind:
    """Map a free-text category to a RecordKind. Absence keywords win over dismissal ones."""
    text = (category or "").lower()
    if "absence" in text or "absent" in text:
        return RecordKind.ABSENCE
    if "early" in text or "dismissal" in text:
        return RecordKind.DISMISSAL
    return RecordKind.NEUTRAL


def classify_status(status: Optional[str]) -> AttendanceStatus:
    """Map a free-text status to an AttendanceStatus."""
    text = (status or "").lower()
    # "unexcused" contains "excused", so it has to be checked first
    if "unexcused" in text:
        return AttendanceStatus.UNEXCUSED
    if "excused" in text:
        return AttendanceStatus.EXCUSED
    return AttendanceStatus.UNSPECIFIED


def resolve_date(value: Any) -> Optional[date]:
    """Coerce a date, datetime or ISO string to a date. Anything else is None."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError:
            return None
    return None


def weekday_key(day: Optional[date]) -> str:
    return _DAY_NAMES[day.weekday()] if day else INVALID_DATE


def month_key(day: Optional[date]) -> str:
    return f"{_MONTH_NAMES[day.month - 1]} {day.year}" if day else INVALID_DATE


@dataclass(frozen=True)
class ClassifiedRecord:
    """A record after ingestion: free text resolved to enums and bucket keys."""
    person: str
    grade: str
    kind: RecordKind
    status: AttendanceStatus
    day: Optional[date]
    weekday: str
    month: str
    late: bool
    late_unexcused: bool


def classify_record(record: Any, thresholds: AttendanceThresholds) -> ClassifiedRecord:
    raw_status = getattr(record, "status", None)
    late_time = getattr(record, "late_arrival_time", None)
    late = bool(late_time) if isinstance(late_time, str) else late_time is not None
    day = resolve_date(getattr(record, "attendance_date", None))
    person = getattr(record, "person", None)
    grade = getattr(record, "grade", None)
    return ClassifiedRecord(
        person="" if person is None else str(person),
        grade="" if grade is None else str(grade),
        kind=classify_category(getattr(record, "category", None)),
        status=classify_status(raw_status),
        day=day,
        weekday=weekday_key(day),
        month=month_key(day),
        late=late,
        late_unexcused=late and raw_status == thresholds.late_arrival_is_unexcused,
    )


@dataclass
class _StudentTally:
    student: str
    grade: str
    total_absences: int = 0
    total_dismissals: int = 0
    excused_absences: int = 0
    unexcused_absences: int = 0
    late_arrivals: int = 0
    unexcused_late_arrivals: int = 0
    absence_dates: set[date] = field(default_factory=set)


@dataclass
class _BucketTally:
    absences: int = 0
    dismissals: int = 0
    students: set[str] = field(default_factory=set)
    days: set[date] = field(default_factory=set)


def _next_school_day(day: date) -> date:
    # Friday -> Monday, Saturday -> Monday
    step = {4: 3, 5: 2}.get(day.weekday(), 1)
    return day + timedelta(days=step)


def absence_streaks(dates: Iterable[date]) -> tuple[int, int]:
    """Return (streak ending at the latest absence, longest streak) over school days."""
    ordered = sorted(set(dates))
    if not ordered:
        return 0, 0
    current = longest = 1
    for previous, day in zip(ordered, ordered[1:]):
        current = current + 1 if day == _next_school_day(previous) else 1
        longest = max(longest, current)
    return current, longest


def estimate_school_days(total_records: int, unique_students: int, thresholds: AttendanceThresholds) -> float:
    """School days covered by the data set.

    Uses the configured calendar length when there is one, otherwise approximates it
    from record volume (records per student), which is never below 1.
    """
    if thresholds.school_days:
        return float(thresholds.school_days)
    return max(1, total_records / max(1, unique_students))


def _student_metrics(
    tally: _StudentTally, school_days: float, thresholds: AttendanceThresholds
) -> tuple[StudentMetrics, float]:
    absence_rate = tally.total_absences / school_days * 100
    consecutive, longest = absence_streaks(tally.absence_dates)

    needs_absence_follow_up = (
        absence_rate >= thresholds.intervention_rate
        or tally.unexcused_absences >= thresholds.unexcused_count
    )
    needs_tardy_follow_up = tally.unexcused_late_arrivals >= thresholds.late_arrival_intervention_count

    flags = {}
    if needs_absence_follow_up or needs_tardy_follow_up:
        reasons = []
        if needs_absence_follow_up:
            reasons.append(ABSENCE_REASON)
        if needs_tardy_follow_up:
            reasons.append(LATE_ARRIVAL_REASON)
        flags = {
            "risk_level": RiskLevel.HIGH if absence_rate >= thresholds.high_risk_rate else RiskLevel.MEDIUM,
            "reason": " & ".join(reasons),
            "intervention_needed": True,
        }

    metrics = StudentMetrics(
        student=tally.student,
        grade=tally.grade,
        total_absences=tally.total_absences,
        total_dismissals=tally.total_dismissals,
        excused_absences=tally.excused_absences,
        unexcused_absences=tally.unexcused_absences,
        consecutive_absences=consecutive,
        max_consecutive_absences=longest,
        absence_rate=f"{absence_rate:.1f}%",
        late_arrivals=LateArrivalCounts(
            total=tally.late_arrivals,
            unexcused=tally.unexcused_late_arrivals,
        ),
        **flags,
    )
    return metrics, absence_rate


def analyze(records: Iterable[Any], thresholds: Optional[AttendanceThresholds] = None) -> AnalyticsReport:
    """Build the attendance analytics report for ``records``.

    Args:
        records: Attendance records (documents or schemas). Missing fields count as empty.
        thresholds: Flagging boundaries; defaults apply when None.

    Returns:
        A frozen AnalyticsReport.
    """
    thresholds = thresholds or AttendanceThresholds()

    students: dict[str, _StudentTally] = {}
    grades: dict[str, _BucketTally] = {}
    months: dict[str, _BucketTally] = {}
    weekdays = {name: _BucketTally() for name in SCHOOL_WEEKDAYS}

    total_records = 0
    total_absences = 0
    total_dismissals = 0
    total_late = 0
    total_late_unexcused = 0
    earliest: Optional[date] = None
    latest: Optional[date] = None

    for record in records:
        entry = classify_record(record, thresholds)
        total_records += 1

        student = students.get(entry.person)
        if student is None:
            student = students[entry.person] = _StudentTally(student=entry.person, grade=entry.grade)
        grade = grades.get(entry.grade)
        if grade is None:
            grade = grades[entry.grade] = _BucketTally()
        month = months.get(entry.month)
        if month is None:
            month = months[entry.month] = _BucketTally()
        weekday = weekdays.get(entry.weekday)

        grade.students.add(entry.person)
        month.students.add(entry.person)
        if entry.day is not None:
            month.days.add(entry.day)
            earliest = entry.day if earliest is None else min(earliest, entry.day)
            latest = entry.day if latest is None else max(latest, entry.day)

        if entry.kind is RecordKind.ABSENCE:
            total_absences += 1
            grade.absences += 1
            month.absences += 1
            if weekday is not None:
                weekday.absences += 1
            student.total_absences += 1
            if entry.day is not None:
                student.absence_dates.add(entry.day)
            if entry.status is AttendanceStatus.UNEXCUSED:
                student.unexcused_absences += 1
            elif entry.status is AttendanceStatus.EXCUSED:
                student.excused_absences += 1
        elif entry.kind is RecordKind.DISMISSAL:
            total_dismissals += 1
            grade.dismissals += 1
            month.dismissals += 1
            if weekday is not None:
                weekday.dismissals += 1
            student.total_dismissals += 1

        if entry.late:
            total_late += 1
            student.late_arrivals += 1
            if entry.late_unexcused:
                total_late_unexcused += 1
                student.unexcused_late_arrivals += 1

    unique_students = len(students)
    school_days = estimate_school_days(total_records, unique_students, thresholds)
    if unique_students:
        expected = school_days * unique_students
        attendance_rate = round((expected - total_absences) / expected * 100, 2)
    else:
        attendance_rate = 100.0

    chronic: dict[str, StudentMetrics] = {}
    intervention: list[StudentMetrics] = []
    streaks: dict[str, StudentMetrics] = {}
    for tally in students.values():
        metrics, absence_rate = _student_metrics(tally, school_days, thresholds)
        if absence_rate >= thresholds.chronic_absence_rate:
            chronic[metrics.student] = metrics
        if metrics.intervention_needed:
            intervention.append(metrics)
        if metrics.consecutive_absences >= thresholds.consecutive_days:
            streaks[metrics.student] = metrics

    logger.info(
        f"Attendance analysis: {total_records} records, {unique_students} students, "
        f"{len(chronic)} chronically absent, {len(intervention)} need intervention, "
        f"{len(streaks)} on an absence streak"
    )

    return AnalyticsReport(
        total_records=total_records,
        total_absences=total_absences,
        total_early_dismissals=total_dismissals,
        total_late_arrivals=total_late,
        total_unexcused_late_arrivals=total_late_unexcused,
        unique_students=unique_students,
        school_days=school_days,
        attendance_rate=attendance_rate,
        chronic_absenteeism=chronic,
        intervention_needed=intervention,
        consecutive_absentees=streaks,
        by_grade={
            key: GradeBreakdown(absences=b.absences, dismissals=b.dismissals, students=len(b.students))
            for key, b in grades.items()
        },
        by_month={
            key: MonthBreakdown(
                absences=b.absences,
                dismissals=b.dismissals,
                students=len(b.students),
                school_days=len(b.days),
            )
            for key, b in months.items()
        },
        by_day_of_week={
            key: DayOfWeekBreakdown(absences=b.absences, dismissals=b.dismissals)
            for key, b in weekdays.items()
        },
        date_range=DateRange(earliest=earliest, latest=latest),
    )
