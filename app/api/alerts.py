"""Student alerts: attendance pattern analysis and alert follow-up."""
import logging
from datetime import datetime
from typing import List

from fastapi import APIRouter, HTTPException, Query

from app.api.deps import CounselorOrAdmin, CurrentUser, parse_object_id
from app.config import settings
from app.models.alert import AnalysisRunResult, StudentAlert, StudentAlertOut
from app.services import records
from app.services.alerts import build_attendance_alerts
from app.services.attendance_analytics import analyze

logger = logging.getLogger(__name__)

router = APIRouter()


def _out(alert: StudentAlert) -> dict:
    return {**alert.model_dump(exclude={"id", "user_id"}), "id": str(alert.id)}


async def _get_owned(alert_id: str, user_id: str) -> StudentAlert:
    alert = await records.get_alert(user_id, parse_object_id(alert_id, "alert id"))
    if not alert:
        raise HTTPException(status_code=404, detail="Alert not found")
    return alert


@router.get("/", response_model=List[StudentAlertOut])
async def list_alerts(user: CurrentUser, include_resolved: bool = Query(False)):
    alerts = await records.list_alerts(str(user.id), include_resolved=include_resolved)
    return [_out(a) for a in alerts]


@router.post("/run-analysis", response_model=AnalysisRunResult)
async def run_pattern_analysis(user: CounselorOrAdmin):
    """Analyze attendance and raise an alert for each newly flagged student."""
    user_id = str(user.id)
    rows = await records.list_attendance_records(user_id, limit=settings.analytics_record_limit)
    report = analyze(rows, await records.get_thresholds(user_id))

    flagged = [m.student for m in report.intervention_needed]
    flagged += [name for name in report.consecutive_absentees if name not in flagged]
    already_open = await records.open_attendance_alert_students(user_id, flagged)
    payloads = build_attendance_alerts(report, exclude=already_open)
    created = await records.insert_alerts(user_id, payloads)

    logger.info(
        f"Pattern analysis for user {user_id}: {len(flagged)} flagged, "
        f"{len(created)} alerts created, {len(already_open)} already open"
    )
    return {
        "flagged": len(flagged),
        "created": len(created),
        "skipped": len(already_open),
        "alerts": [_out(a) for a in created],
    }


@router.post("/{alert_id}/acknowledge", response_model=StudentAlertOut)
async def acknowledge_alert(alert_id: str, user: CurrentUser):
    alert = await _get_owned(alert_id, str(user.id))
    if not alert.acknowledged:
        alert.acknowledged = True
        alert.acknowledged_by = user.full_name
        alert.acknowledged_at = datetime.utcnow()
        await alert.save()
    return _out(alert)


@router.post("/{alert_id}/resolve", response_model=StudentAlertOut)
async def resolve_alert(alert_id: str, user: CounselorOrAdmin):
    alert = await _get_owned(alert_id, str(user.id))
    if alert.resolved:
        raise HTTPException(status_code=400, detail="Alert is already resolved")
    alert.resolved = True
    alert.resolved_at = datetime.utcnow()
    await alert.save()
    return _out(alert)
