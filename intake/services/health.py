"""
Deployment verification and maintenance health check.

Readiness covers what the intake pipeline needs to do useful work: a
reachable database, an admin address for alerts, a business address for
client replies, and a mail transport.
"""

import logging
from collections.abc import Awaitable, Callable

from intake.config import Settings, settings
from intake.schemas.submission import CheckResult, MessagePayload, ReadinessReport
from intake.services.mailer import Mailer
from intake.services.notifications import build_health_check_report

logger = logging.getLogger(__name__)

DatabaseProbe = Callable[[], Awaitable[None]]


async def run_readiness_checks(db_probe: DatabaseProbe, config: Settings = settings) -> ReadinessReport:
    checks: dict[str, CheckResult] = {}

    try:
        await db_probe()
        checks["database"] = CheckResult(ok=True, detail="reachable")
    except Exception as e:
        logger.warning("Database readiness check failed: %s", e)
        checks["database"] = CheckResult(ok=False, detail=str(e) or type(e).__name__)

    checks["admin_email"] = CheckResult(
        ok=bool(config.admin_email), detail=config.admin_email or "ADMIN_EMAIL is not set"
    )
    checks["business_email"] = CheckResult(
        ok=bool(config.business_email), detail=config.business_email or "BUSINESS_EMAIL is not set"
    )

    if config.mail_dry_run:
        checks["mail_transport"] = CheckResult(ok=True, detail="dry run")
    elif config.smtp_host:
        checks["mail_transport"] = CheckResult(ok=True, detail=f"smtp {config.smtp_host}:{config.smtp_port}")
    else:
        checks["mail_transport"] = CheckResult(ok=False, detail="SMTP_HOST is not set")

    return ReadinessReport(ready=all(c.ok for c in checks.values()), checks=checks)


async def send_health_check(db_probe: DatabaseProbe, mailer: Mailer) -> tuple[ReadinessReport, MessagePayload]:
    """Run the readiness checks and mail the result to the admin."""
    report = await run_readiness_checks(db_probe)
    payload = build_health_check_report(report)
    await mailer.send(payload)
    logger.info("System health check sent (ready=%s)", report.ready)
    return report, payload
