from datetime import date, datetime, timezone
from types import SimpleNamespace

import pytest

from intake.services.reporting import compile_daily_stats, send_daily_report

from conftest import ADMIN, MemorySink


def _row(priority="MEDIUM", timeline="", budget_range="", lead_source=""):
    return SimpleNamespace(priority=priority, timeline=timeline, budget_range=budget_range, lead_source=lead_source)


ROWS = [
    _row("HIGH", "ASAP (Rush - Additional fees may apply)", "$15,000+ (Enterprise)", "Google Search"),
    _row("HIGH", "Within 1 month", "$15,000+ (Enterprise)", "Previous client"),
    _row("LOW", "Just exploring options", "Need consultation for pricing", ""),
]


def test_compile_daily_stats_counts_rows() -> None:
    stats = compile_daily_stats(date(2026, 10, 19), ROWS)
    assert stats.date == "2026-10-19"
    assert stats.total == 3
    assert stats.by_priority == {"HIGH": 2, "LOW": 1}
    assert stats.rush_projects == 1
    assert stats.high_value_leads == 2
    assert stats.lead_sources == {"Google Search": 1, "Previous client": 1, "Unspecified": 1}
    assert stats.budget_distribution["$15,000+ (Enterprise)"] == 2


def test_compile_daily_stats_empty_day() -> None:
    stats = compile_daily_stats(date(2026, 1, 1), [])
    assert stats.total == 0
    assert stats.by_priority == {}


@pytest.mark.asyncio
async def test_send_daily_report_queries_the_utc_day_and_mails_admin(mailer) -> None:
    sink = MemorySink(rows=ROWS)
    payload = await send_daily_report(sink, mailer, date(2026, 10, 19))

    start, end = sink.queried
    assert start == datetime(2026, 10, 19, tzinfo=timezone.utc)
    assert end == datetime(2026, 10, 20, tzinfo=timezone.utc)
    assert mailer.sent == [payload]
    assert payload.recipient == ADMIN
    assert "Total Inquiries: 3" in payload.body
