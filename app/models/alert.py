"""Student alerts raised by attendance pattern analysis."""
from datetime import datetime
from enum import Enum
from typing import Optional

from beanie import Document, Indexed
from pydantic import BaseModel, Field


class AlertType(str, Enum):
    ATTENDANCE_PATTERN = "Attendance Pattern"
    BEHAVIOR_ESCALATION = "Behavior Escalation"
    ACADEMIC_DECLINE = "Academic Decline"
    WITHDRAWAL_RISK = "Withdrawal Risk"
    FAMILY_ISSUES = "Family Issues"


class AlertSeverity(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"


class StudentAlert(Document):
    user_id: Indexed(str)
    student_name: Indexed(str)
    alert_type: AlertType = AlertType.ATTENDANCE_PATTERN
    severity: AlertSeverity
    alert_message: str
    trigger_data: Optional[str] = None
    acknowledged: bool = False
    acknowledged_by: Optional[str] = None
    acknowledged_at: Optional[datetime] = None
    resolved: bool = False
    resolved_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "student_alerts"
        use_state_management = True


class StudentAlertCreate(BaseModel):
    student_name: str
    alert_type: AlertType = AlertType.ATTENDANCE_PATTERN
    severity: AlertSeverity
    alert_message: str
    trigger_data: Optional[str] = None


class StudentAlertOut(BaseModel):
    id: str
    student_name: str
    alert_type: AlertType
    severity: AlertSeverity
    alert_message: str
    trigger_data: Optional[str] = None
    acknowledged: bool
    acknowledged_by: Optional[str] = None
    acknowledged_at: Optional[datetime] = None
    resolved: bool
    resolved_at: Optional[datetime] = None
    created_at: datetime


class AnalysisRunResult(BaseModel):
    flagged: int
    created: int
    skipped: int
    alerts: list[StudentAlertOut] = Field(default_factory=list)
