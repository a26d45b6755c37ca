"""Tests for building student alerts from an analytics report."""
from datetime import date

from app.models.alert import AlertSeverity, AlertType
from app.models.settings import AttendanceThresholds
from app.services.alerts import alert_for_student, build_attendance_alerts
from app.services.attendance_analytics import analyze
from conftest import make_record, school_days_from


def _report():
    rows = [
        make_record(person="Zoe", grade="10"),
        make_record(person="Adam", grade="9"),
        make_record(person="Mia", grade="9", category="Present", status=""),
        make_record(person="Mia", grade="9", category="Present", status=""),
    ]
    return analyze(rows, AttendanceThresholds())


class TestBuildAttendanceAlerts:

    def test_one_alert_per_flagged_student_in_order(self):
        alerts = build_attendance_alerts(_report())

        assert [a.student_name for a in alerts] == ["Zoe", "Adam"]
        assert all(a.alert_type is AlertType.ATTENDANCE_PATTERN for a in alerts)

    def test_excluded_students_skipped(self):
        alerts = build_attendance_alerts(_report(), exclude={"Zoe"})
        assert [a.student_name for a in alerts] == ["Adam"]

    def test_no_flags_no_alerts(self):
        assert build_attendance_alerts(analyze([])) == []

    def test_absence_streak_raises_alert_without_intervention(self):
        rows = [make_record(person="Sam", attendance_date=d) for d in school_days_from(date(2024, 1, 8), 3)]
        report = analyze(rows, AttendanceThresholds(consecutive_days=3, school_days=100))

        assert report.intervention_needed == []
        alerts = build_attendance_alerts(report)

        assert [a.student_name for a in alerts] == ["Sam"]
        assert alerts[0].severity is AlertSeverity.MEDIUM
        assert alerts[0].trigger_data == "Consecutive Absences | 3.0%"
        assert "3 consecutive absences" in alerts[0].alert_message

    def test_streak_threshold_changes_alerts(self):
        rows = [make_record(person="Sam", attendance_date=d) for d in school_days_from(date(2024, 1, 8), 3)]

        assert build_attendance_alerts(analyze(rows, AttendanceThresholds(consecutive_days=1, school_days=100)))
        assert build_attendance_alerts(analyze(rows, AttendanceThresholds(consecutive_days=50, school_days=100))) == []

    def test_flagged_student_on_streak_gets_one_alert(self):
        rows = [make_record(person="Sam", attendance_date=d) for d in school_days_from(date(2024, 1, 8), 3)]
        alerts = build_attendance_alerts(analyze(rows, AttendanceThresholds(consecutive_days=3)))

        assert [a.student_name for a in alerts] == ["Sam"]
        assert alerts[0].severity is AlertSeverity.HIGH
        assert alerts[0].trigger_data == "Absences & Consecutive Absences | 100.0%"


class TestAlertForStudent:

    def test_high_risk_maps_to_high_severity(self):
        student = _report().intervention_needed[0]
        alert = alert_for_student(student)

        assert alert.severity is AlertSeverity.HIGH
        assert "Zoe" in alert.alert_message
        assert student.absence_rate in alert.alert_message
        assert alert.trigger_data == f"Absences | {student.absence_rate}"

    def test_medium_risk_maps_to_medium_severity(self):
        thresholds = AttendanceThresholds(unexcused_count=1)
        rows = [make_record(person="A")] + [
            make_record(person="A", category="Present", status="") for _ in range(9)
        ]
        student = analyze(rows, thresholds).intervention_needed[0]

        assert alert_for_student(student).severity is AlertSeverity.MEDIUM
