"""Beanie document models and Pydantic schemas."""
from app.models.user import User, UserRole, UserCreate, UserOut
from app.models.attendance import (
    AttendanceRecord,
    AttendanceRecordCreate,
    AttendanceRecordOut,
    AttendanceRecordUpdate,
    AttendanceStatus,
    RecordKind,
)
from app.models.settings import AttendanceSettings, AttendanceThresholds, ThresholdsOut, ThresholdsUpdate
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
from app.models.alert import (
    AlertSeverity,
    AlertType,
    AnalysisRunResult,
    StudentAlert,
    StudentAlertCreate,
    StudentAlertOut,
)

__all__ = [
    "User",
    "UserRole",
    "UserCreate",
    "UserOut",
    "AttendanceRecord",
    "AttendanceRecordCreate",
    "AttendanceRecordOut",
    "AttendanceRecordUpdate",
    "AttendanceStatus",
    "RecordKind",
    "AttendanceSettings",
    "AttendanceThresholds",
    "ThresholdsOut",
    "ThresholdsUpdate",
    "AnalyticsReport",
    "DateRange",
    "DayOfWeekBreakdown",
    "GradeBreakdown",
    "LateArrivalCounts",
    "MonthBreakdown",
    "RiskLevel",
    "StudentMetrics",
    "AlertSeverity",
    "AlertType",
    "AnalysisRunResult",
    "StudentAlert",
    "StudentAlertCreate",
    "StudentAlertOut",
]
