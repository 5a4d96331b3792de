"""
/reports — scheduled admin emails, called by an external scheduler.

  POST /reports/daily         daily analytics report
  POST /reports/health-check  readiness checks mailed to the admin
"""

import logging
from datetime import date, datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from intake.routes.health import get_db_probe
from intake.schemas.submission import ReadinessReport
from intake.services.health import DatabaseProbe, send_health_check
from intake.services.mailer import Mailer, build_mailer
from intake.services.reporting import send_daily_report
from intake.services.storage import SqlSubmissionSink, SubmissionSink

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/reports", tags=["reports"])


def get_sink() -> SubmissionSink:
    return SqlSubmissionSink()


def get_mailer() -> Mailer:
    return build_mailer()


class DailyReportResponse(BaseModel):
    sent: bool
    date: str
    recipient: str
    subject: str


@router.post("/daily", response_model=DailyReportResponse)
async def daily_report(
    day: Optional[date] = Query(None, alias="date", description="ISO date (UTC), default today"),
    sink: SubmissionSink = Depends(get_sink),
    mailer: Mailer = Depends(get_mailer),
):
    day = day or datetime.now(timezone.utc).date()
    try:
        payload = await send_daily_report(sink, mailer, day)
    except Exception as e:
        logger.exception("Daily analytics report failed for %s", day.isoformat())
        raise HTTPException(status_code=502, detail=f"Daily report failed: {e}") from e

    return DailyReportResponse(
        sent=True,
        date=day.isoformat(),
        recipient=payload.recipient,
        subject=payload.subject,
    )


class HealthCheckResponse(BaseModel):
    sent: bool
    recipient: str
    report: ReadinessReport


@router.post("/health-check", response_model=HealthCheckResponse)
async def health_check_report(
    db_probe: DatabaseProbe = Depends(get_db_probe),
    mailer: Mailer = Depends(get_mailer),
):
    """Run the maintenance health check and email the result to the admin."""
    try:
        report, payload = await send_health_check(db_probe, mailer)
    except Exception as e:
        logger.exception("System health check email failed")
        raise HTTPException(status_code=502, detail=f"Health check email failed: {e}") from e

    return HealthCheckResponse(sent=True, recipient=payload.recipient, report=report)
