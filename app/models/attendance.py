"""Attendance records: one row per student event (absence, dismissal, late arrival)."""
from datetime import date, datetime
from enum import Enum
from typing import Optional

from beanie import Document, Indexed
from pydantic import BaseModel, ConfigDict, Field


class RecordKind(str, Enum):
    """What a record counts as. Assigned once from the free-text category."""
    ABSENCE = "absence"
    DISMISSAL = "dismissal"
    NEUTRAL = "neutral"


class AttendanceStatus(str, Enum):
    """Excuse status of a record, resolved from the free-text status."""
    EXCUSED = "excused"
    UNEXCUSED = "unexcused"
    UNSPECIFIED = "unspecified"


class AttendanceRecord(Document):
    """Attendance event entered by a school user."""
    user_id: Indexed(str)
    attendance_date: Optional[date] = None
    grade: str = ""
    person: str
    category: str = ""  # e.g. "Absent", "Early Dismissal", "Tardy"
    status: str = ""  # e.g. "Excused", "Unexcused"
    late_arrival_time: Optional[str] = None
    early_dismissal_time: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "attendance_records"
        use_state_management = True


class AttendanceRecordCreate(BaseModel):
    model_config = ConfigDict(extra="ignore")
    attendance_date: Optional[date] = None
    grade: str = ""
    person: str
    category: str = ""
    status: str = ""
    late_arrival_time: Optional[str] = None
    early_dismissal_time: Optional[str] = None
    notes: Optional[str] = None


class AttendanceRecordUpdate(BaseModel):
    model_config = ConfigDict(extra="ignore")
    attendance_date: Optional[date] = None
    grade: Optional[str] = None
    person: Optional[str] = None
    category: Optional[str] = None
    status: Optional[str] = None
    late_arrival_time: Optional[str] = None
    early_dismissal_time: Optional[str] = None
    notes: Optional[str] = None


class AttendanceRecordOut(BaseModel):
    id: str
    attendance_date: Optional[date] = None
    grade: str
    person: str
    category: str
    status: str
    late_arrival_time: Optional[str] = None
    early_dismissal_time: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime
