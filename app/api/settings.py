"""Attendance thresholds per user."""
from fastapi import APIRouter

from app.api.deps import CounselorOrAdmin, CurrentUser
from app.config import settings as app_settings
from app.models.settings import AttendanceThresholds, ThresholdsOut, ThresholdsUpdate
from app.services import records

router = APIRouter()


@router.get("/thresholds", response_model=ThresholdsOut)
async def get_thresholds(user: CurrentUser):
    """Current thresholds, or the defaults if none were saved yet."""
    settings = await records.get_settings(str(user.id))
    if not settings:
        return ThresholdsOut(school_year=app_settings.default_school_year, thresholds=AttendanceThresholds())
    return ThresholdsOut(school_year=settings.school_year, thresholds=settings.thresholds)


@router.put("/thresholds", response_model=ThresholdsOut)
async def update_thresholds(data: ThresholdsUpdate, user: CounselorOrAdmin):
    settings = await records.save_thresholds(str(user.id), data.thresholds, data.school_year)
    return ThresholdsOut(school_year=settings.school_year, thresholds=settings.thresholds)
