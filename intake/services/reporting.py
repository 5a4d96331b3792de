"""
Daily analytics report.

Invoked once a day by an external scheduler (POST /reports/daily); shares the
admin payload conventions of the submission notifications.
"""

import logging
from collections import Counter
from collections.abc import Iterable
from datetime import date, datetime, time, timedelta, timezone

from intake.db.models import Submission
from intake.schemas.submission import DailyStats, MessagePayload
from intake.services.mailer import Mailer
from intake.services.notifications import build_daily_report
from intake.services.storage import SubmissionSink

logger = logging.getLogger(__name__)

UNSPECIFIED = "Unspecified"


def compile_daily_stats(day: date, submissions: Iterable[Submission]) -> DailyStats:
    total = 0
    priorities: Counter[str] = Counter()
    sources: Counter[str] = Counter()
    budgets: Counter[str] = Counter()
    rush = high_value = 0

    for row in submissions:
        total += 1
        priorities[row.priority] += 1
        sources[row.lead_source or UNSPECIFIED] += 1
        budgets[row.budget_range or UNSPECIFIED] += 1
        if "ASAP" in (row.timeline or ""):
            rush += 1
        if "$15,000+" in (row.budget_range or ""):
            high_value += 1

    return DailyStats(
        date=day.isoformat(),
        total=total,
        by_priority=dict(priorities),
        rush_projects=rush,
        high_value_leads=high_value,
        lead_sources=dict(sources),
        budget_distribution=dict(budgets),
    )


async def send_daily_report(sink: SubmissionSink, mailer: Mailer, day: date | None = None) -> MessagePayload:
    """Compile the report for `day` (UTC, default today) and mail it to the admin."""
    day = day or datetime.now(timezone.utc).date()
    start = datetime.combine(day, time.min, tzinfo=timezone.utc)
    rows = await sink.between(start, start + timedelta(days=1))

    payload = build_daily_report(compile_daily_stats(day, rows))
    await mailer.send(payload)
    logger.info("Daily analytics report sent for %s (%d submissions)", day.isoformat(), len(rows))
    return payload
