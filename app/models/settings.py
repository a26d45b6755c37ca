"""Per-user attendance thresholds that drive chronic-absence and intervention flags."""
from datetime import datetime
from typing import Optional

from beanie import Document, Indexed
from pydantic import BaseModel, ConfigDict, Field


class AttendanceThresholds(BaseModel):
    """Flagging boundaries. Rates are percentages, counts are per student."""
    model_config = ConfigDict(extra="ignore")

    chronic_absence_rate: float = Field(10, ge=0, le=100)
    high_risk_rate: float = Field(20, ge=0, le=100)  # HIGH vs MEDIUM risk boundary
    intervention_rate: float = Field(15, ge=0, le=100)
    consecutive_days: int = Field(5, ge=1)  # absence streak that raises an alert
    unexcused_count: int = Field(10, ge=0)
    late_arrival_intervention_count: int = Field(8, ge=0)
    late_arrival_is_unexcused: str = "Unexcused"  # compared verbatim against record status
    # Length of the school calendar; None falls back to records / students
    school_days: Optional[int] = Field(None, gt=0)


class AttendanceSettings(Document):
    """Single settings doc per user."""

    user_id: Indexed(str, unique=True)
    school_year: str = ""
    thresholds: AttendanceThresholds = Field(default_factory=AttendanceThresholds)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "settings"
        use_state_management = True


class ThresholdsUpdate(BaseModel):
    school_year: Optional[str] = None
    thresholds: AttendanceThresholds


class ThresholdsOut(BaseModel):
    school_year: str = ""
    thresholds: AttendanceThresholds
