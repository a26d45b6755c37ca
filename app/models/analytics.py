"""Attendance analytics report shapes.

Attributes are snake_case; JSON uses the camelCase names the dashboard charts read
(``totalRecords``, ``byDayOfWeek`` ...). All report models are frozen: a report is
built once per analysis call and never changed afterwards.
"""
from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class RiskLevel(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class ReportModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class LateArrivalCounts(ReportModel):
    total: int = 0
    unexcused: int = 0


class StudentMetrics(ReportModel):
    student: str
    grade: str
    total_absences: int = 0
    total_dismissals: int = 0
    excused_absences: int = 0
    unexcused_absences: int = 0
    consecutive_absences: int = 0
    max_consecutive_absences: int = 0
    absence_rate: str = "0.0%"
    late_arrivals: LateArrivalCounts = Field(default_factory=LateArrivalCounts)
    # Only set for students that crossed an intervention threshold
    risk_level: Optional[RiskLevel] = None
    reason: Optional[str] = None
    intervention_needed: bool = False


class GradeBreakdown(ReportModel):
    absences: int = 0
    dismissals: int = 0
    students: int = 0


class MonthBreakdown(ReportModel):
    absences: int = 0
    dismissals: int = 0
    students: int = 0
    school_days: int = 0


class DayOfWeekBreakdown(ReportModel):
    absences: int = 0
    dismissals: int = 0


class DateRange(ReportModel):
    earliest: Optional[date] = None
    latest: Optional[date] = None


class AnalyticsReport(ReportModel):
    total_records: int = 0
    total_absences: int = 0
    total_early_dismissals: int = 0
    total_late_arrivals: int = 0
    total_unexcused_late_arrivals: int = 0
    unique_students: int = 0
    school_days: float = 1
    attendance_rate: float = 100
    chronic_absenteeism: dict[str, StudentMetrics] = Field(default_factory=dict)
    intervention_needed: list[StudentMetrics] = Field(default_factory=list)
    # Students whose current absence streak reached the consecutive-days threshold
    consecutive_absentees: dict[str, StudentMetrics] = Field(default_factory=dict)
    by_grade: dict[str, GradeBreakdown] = Field(default_factory=dict)
    by_month: dict[str, MonthBreakdown] = Field(default_factory=dict)
    by_day_of_week: dict[str, DayOfWeekBreakdown] = Field(default_factory=dict)
    date_range: DateRange = Field(default_factory=DateRange)
