from intake.config import settings
from intake.schemas.submission import Classification, DailyStats, Priority, SubmissionRecord
from intake.services.notifications import (
    INDIVIDUAL,
    NO_REQUIREMENTS,
    NOT_SPECIFIED,
    TO_BE_DISCUSSED,
    build_admin_alert,
    build_client_confirmation,
    build_daily_report,
    build_error_alert,
    build_notifications,
    build_urgent_alert,
)
from intake.services.priority import classify

from conftest import ADMIN


def _classified(**fields):
    record = SubmissionRecord(response_id="IAH-ABCD1234", **fields)
    return record, classify(record)


def test_client_confirmation_uses_record_email_and_fallbacks() -> None:
    record, _ = _classified(name="Ada", email="ada@example.com")
    payload = build_client_confirmation(record)
    assert payload.kind == "client_confirmation"
    assert payload.recipient == "ada@example.com"
    assert "IAH-ABCD1234" in payload.subject
    assert "Reference ID: IAH-ABCD1234" in payload.body
    assert f"Services: {NOT_SPECIFIED}" in payload.body
    assert f"Timeline: {NOT_SPECIFIED}" in payload.body
    assert f"Budget Range: {TO_BE_DISCUSSED}" in payload.body


def test_client_confirmation_is_skipped_without_email() -> None:
    record, classification = _classified(name="No Mail", timeline="Within 1 month")
    assert build_client_confirmation(record) is None
    kinds = [p.kind for p in build_notifications(record, classification)]
    assert kinds == ["admin_alert"]


def test_admin_alert_carries_priority_and_all_client_fields() -> None:
    record, classification = _classified(
        name="Ada",
        email="ada@example.com",
        phone="+1 555",
        timeline="Within 1-2 weeks",
        requirements="Shop with Stripe",
    )
    payload = build_admin_alert(record, classification)
    assert payload.recipient == ADMIN
    assert payload.subject == "New Lead Alert [MEDIUM] - IAH-ABCD1234"
    assert f"Company: {INDIVIDUAL}" in payload.body
    assert "Shop with Stripe" in payload.body
    assert "+1 555" in payload.body


def test_admin_alert_requirements_fallback() -> None:
    record, classification = _classified(name="Ada")
    assert NO_REQUIREMENTS in build_admin_alert(record, classification).body


def test_urgent_alert_lists_classification_reasons() -> None:
    record, classification = _classified(
        name="Rush Client",
        email="rush@example.com",
        timeline="ASAP (Rush)",
        budget_range="$15,000+ (Enterprise)",
        services_interested="Mobile Application Creations",
    )
    payloads = build_notifications(record, classification)
    assert [p.kind for p in payloads] == ["client_confirmation", "admin_alert", "urgent_alert"]

    urgent = payloads[-1]
    assert urgent.recipient == ADMIN
    assert "URGENT timeline requirement" in urgent.body
    assert "High budget potential" in urgent.body
    assert "Reference ID: IAH-ABCD1234" in urgent.body
    for reason in classification.reasons:
        assert f"- {reason}" in urgent.body


def test_urgent_alert_only_for_high() -> None:
    record = SubmissionRecord(response_id="IAH-1", budget_range="Enterprise")
    assert build_urgent_alert(record, Classification(priority=Priority.LOW)) is None
    assert build_urgent_alert(record, Classification(priority=Priority.MEDIUM)) is None


def test_flexible_basic_has_no_urgent_alert() -> None:
    record, classification = _classified(
        email="calm@example.com", timeline="Flexible timeline", budget_range="$500 - $2,000 (Basic)"
    )
    kinds = [p.kind for p in build_notifications(record, classification)]
    assert "urgent_alert" not in kinds


def test_error_alert_contains_error_and_context() -> None:
    try:
        raise KeyError("answers")
    except KeyError as e:
        payload = build_error_alert(e, context="submission IAH-1")
    assert payload.kind == "error_alert"
    assert payload.recipient == ADMIN
    assert "KeyError" in payload.body
    assert "submission IAH-1" in payload.body


def test_daily_report_formats_counts(monkeypatch) -> None:
    monkeypatch.setattr(settings, "dashboard_url", "https://sheets.example/d/1")
    stats = DailyStats(
        date="2026-10-19",
        total=3,
        by_priority={"HIGH": 2, "LOW": 1},
        rush_projects=1,
        high_value_leads=2,
        lead_sources={"Google Search": 2, "Previous client": 1},
    )
    payload = build_daily_report(stats)
    assert payload.subject == "Daily Analytics Report - 2026-10-19"
    assert "Total Inquiries: 3" in payload.body
    assert "High Priority Leads: 2" in payload.body
    assert "Medium Priority Leads: 0" in payload.body
    assert "- Google Search: 2" in payload.body
    assert "https://sheets.example/d/1" in payload.body
