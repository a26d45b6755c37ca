from fastapi import APIRouter

from app.api.deps import CurrentUser
from app.config import settings
from app.models.analytics import AnalyticsReport
from app.services import records
from app.services.attendance_analytics import analyze

router = APIRouter()


@router.get("/analytics", response_model=AnalyticsReport)
async def get_attendance_analytics(user: CurrentUser) -> AnalyticsReport:
    """Attendance analytics for the dashboard charts and at-risk tables."""
    user_id = str(user.id)
    rows = await records.list_attendance_records(user_id, limit=settings.analytics_record_limit)
    thresholds = await records.get_thresholds(user_id)
    return analyze(rows, thresholds)
