"""Shared fixtures. Environment is set before any app module reads Settings."""
import os

os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")

from datetime import date, timedelta
from types import SimpleNamespace

import pytest

from app.models.attendance import AttendanceRecordCreate
from app.models.settings import AttendanceThresholds
from app.models.user import UserRole


def make_record(person="A", grade="9", category="Absent", status="Unexcused",
                attendance_date="2024-01-08", late_arrival_time=None):
    return AttendanceRecordCreate(
        person=person,
        grade=grade,
        category=category,
        status=status,
        attendance_date=attendance_date,
        late_arrival_time=late_arrival_time,
    )


def school_days_from(start: date, count: int) -> list[date]:
    """``count`` consecutive weekdays starting at ``start``."""
    days = []
    day = start
    while len(days) < count:
        if day.weekday() < 5:
            days.append(day)
        day += timedelta(days=1)
    return days


@pytest.fixture
def thresholds():
    return AttendanceThresholds()


@pytest.fixture
def record():
    return make_record


@pytest.fixture
def staff_user():
    return SimpleNamespace(id="64b7f0c2a1b2c3d4e5f60718", role=UserRole.COUNSELOR,
                           full_name="Casey Counselor", is_active=True)
