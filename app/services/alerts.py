"""Turn an analytics report into student alert payloads."""
from app.models.alert import AlertSeverity, AlertType, StudentAlertCreate
from app.models.analytics import AnalyticsReport, RiskLevel, StudentMetrics

CONSECUTIVE_ABSENCE_REASON = "Consecutive Absences"

SEVERITY_BY_RISK = {
    RiskLevel.HIGH: AlertSeverity.HIGH,
    RiskLevel.MEDIUM: AlertSeverity.MEDIUM,
    RiskLevel.LOW: AlertSeverity.LOW,
}


def alert_for_student(metrics: StudentMetrics, on_streak: bool = False) -> StudentAlertCreate:
    severity = SEVERITY_BY_RISK.get(metrics.risk_level, AlertSeverity.MEDIUM)
    reasons = [metrics.reason] if metrics.reason else []
    if on_streak:
        reasons.append(CONSECUTIVE_ABSENCE_REASON)
    reason = " & ".join(reasons) or "Attendance"
    message = (
        f"Intervention needed for {metrics.student} (grade {metrics.grade or 'n/a'}): "
        f"{reason}. Absence rate {metrics.absence_rate}, "
        f"{metrics.unexcused_absences} unexcused absences, "
        f"{metrics.late_arrivals.unexcused} unexcused late arrivals, "
        f"{metrics.consecutive_absences} consecutive absences."
    )
    return StudentAlertCreate(
        student_name=metrics.student,
        alert_type=AlertType.ATTENDANCE_PATTERN,
        severity=severity,
        alert_message=message,
        trigger_data=f"{reason} | {metrics.absence_rate}",
    )


def build_attendance_alerts(report: AnalyticsReport, exclude: set[str] | None = None) -> list[StudentAlertCreate]:
    """One alert per student needing intervention or on an absence streak.

    Intervention students come first in report order, then streak-only students.
    Students named in ``exclude`` (e.g. those with an open alert) are skipped.
    """
    exclude = exclude or set()
    candidates = {m.student: m for m in report.intervention_needed}
    for name, metrics in report.consecutive_absentees.items():
        candidates.setdefault(name, metrics)
    return [
        alert_for_student(metrics, on_streak=name in report.consecutive_absentees)
        for name, metrics in candidates.items()
        if name not in exclude
    ]
