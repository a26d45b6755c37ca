"""Record store: MongoDB queries for attendance, thresholds and alerts, scoped by user."""
from datetime import datetime
from typing import Optional

from beanie import PydanticObjectId
from beanie.odm.operators.find.comparison import In

from app.models.alert import AlertType, StudentAlert, StudentAlertCreate
from app.models.attendance import AttendanceRecord
from app.models.settings import AttendanceSettings, AttendanceThresholds


async def list_attendance_records(
    user_id: str,
    limit: int = 1000,
    grade: Optional[str] = None,
    person: Optional[str] = None,
) -> list[AttendanceRecord]:
    """Newest first, at most ``limit`` rows."""
    query = {"user_id": user_id}
    if grade:
        query["grade"] = grade
    if person:
        query["person"] = person
    return await AttendanceRecord.find(query).sort("-attendance_date").limit(limit).to_list()


async def get_attendance_record(user_id: str, record_id: PydanticObjectId) -> Optional[AttendanceRecord]:
    record = await AttendanceRecord.get(record_id)
    if not record or record.user_id != user_id:
        return None
    return record


async def get_settings(user_id: str) -> Optional[AttendanceSettings]:
    return await AttendanceSettings.find_one(AttendanceSettings.user_id == user_id)


async def get_thresholds(user_id: str) -> AttendanceThresholds:
    settings = await get_settings(user_id)
    return settings.thresholds if settings else AttendanceThresholds()


async def save_thresholds(
    user_id: str, thresholds: AttendanceThresholds, school_year: Optional[str] = None
) -> AttendanceSettings:
    settings = await get_settings(user_id)
    if not settings:
        settings = AttendanceSettings(
            user_id=user_id,
            school_year=school_year or "",
            thresholds=thresholds,
        )
        await settings.insert()
        return settings
    settings.thresholds = thresholds
    if school_year is not None:
        settings.school_year = school_year
    settings.updated_at = datetime.utcnow()
    await settings.save()
    return settings


async def list_alerts(user_id: str, include_resolved: bool = False) -> list[StudentAlert]:
    query = {"user_id": user_id}
    if not include_resolved:
        query["resolved"] = False
    return await StudentAlert.find(query).sort("-created_at").to_list()


async def get_alert(user_id: str, alert_id: PydanticObjectId) -> Optional[StudentAlert]:
    alert = await StudentAlert.get(alert_id)
    if not alert or alert.user_id != user_id:
        return None
    return alert


async def open_attendance_alert_students(user_id: str, names: list[str]) -> set[str]:
    """Students among ``names`` that already have an unresolved attendance alert."""
    if not names:
        return set()
    alerts = await StudentAlert.find(
        StudentAlert.user_id == user_id,
        StudentAlert.alert_type == AlertType.ATTENDANCE_PATTERN,
        StudentAlert.resolved == False,  # noqa: E712
        In(StudentAlert.student_name, names),
    ).to_list()
    return {a.student_name for a in alerts}


async def insert_alerts(user_id: str, payloads: list[StudentAlertCreate]) -> list[StudentAlert]:
    alerts = []
    for payload in payloads:
        alert = StudentAlert(user_id=user_id, **payload.model_dump())
        await alert.insert()
        alerts.append(alert)
    return alerts
