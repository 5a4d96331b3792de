"""
Notification payload construction.

Builds outbound messages only; delivery belongs to the mailer. Every
interpolated field has a fallback so building a payload never fails on a
sparse submission.
"""

import logging
import traceback
from datetime import datetime, timezone

from intake.config import settings
from intake.schemas.submission import (
    Classification,
    DailyStats,
    MessagePayload,
    Priority,
    ReadinessReport,
    SubmissionRecord,
)

logger = logging.getLogger(__name__)

NOT_SPECIFIED = "Not specified"
TO_BE_DISCUSSED = "To be discussed"
INDIVIDUAL = "Individual"
NO_REQUIREMENTS = "No additional details provided"
NOT_PROVIDED = "Not provided"
GENERIC_GREETING = "there"


def _or(value: str, fallback: str) -> str:
    return value if value else fallback


def _dashboard_link() -> str:
    return settings.dashboard_url or NOT_SPECIFIED


def build_client_confirmation(record: SubmissionRecord) -> MessagePayload | None:
    """Confirmation to the submitter; None when the submission has no email."""
    if not record.email:
        logger.warning("No email on %s, skipping client confirmation", record.response_id)
        return None

    subject = f"Inquiry Received - {record.response_id} | {settings.company_name}"
    body = f"""Dear {_or(record.name, GENERIC_GREETING)},

Thank you for your interest in {settings.company_name}!

Your Inquiry Details:
- Reference ID: {record.response_id}
- Services: {_or(record.services_interested, NOT_SPECIFIED)}
- Timeline: {_or(record.timeline, NOT_SPECIFIED)}
- Budget Range: {_or(record.budget_range, TO_BE_DISCUSSED)}

What's Next:
1. Our team will review your requirements within 24 hours
2. You'll receive a detailed proposal via email
3. We'll schedule a consultation call if needed

Need immediate assistance?
Contact us directly at {settings.business_email}

Learn more about us: {settings.linktree_url}

Best regards,
The {settings.company_name} Team
"""
    return MessagePayload(kind="client_confirmation", recipient=record.email, subject=subject, body=body)


def build_admin_alert(record: SubmissionRecord, classification: Classification) -> MessagePayload:
    priority = classification.priority.value
    subject = f"New Lead Alert [{priority}] - {record.response_id}"
    body = f"""NEW CLIENT INQUIRY - {record.response_id}

Client: {_or(record.name, NOT_PROVIDED)}
Email: {_or(record.email, NOT_PROVIDED)}
Phone: {_or(record.phone, NOT_PROVIDED)}
Company: {_or(record.company, INDIVIDUAL)}

Project Details:
- Services: {_or(record.services_interested, NOT_SPECIFIED)}
- Project Type: {_or(record.project_type, NOT_SPECIFIED)}
- Package Tier: {_or(record.package_tier, NOT_SPECIFIED)}
- Timeline: {_or(record.timeline, NOT_SPECIFIED)}
- Budget: {_or(record.budget_range, TO_BE_DISCUSSED)}
- Lead Source: {_or(record.lead_source, NOT_SPECIFIED)}

Requirements:
{_or(record.requirements, NO_REQUIREMENTS)}

Priority Level: {priority}
Response Due: Within 24 hours

View Full Details: {_dashboard_link()}
"""
    return MessagePayload(kind="admin_alert", recipient=settings.admin_email, subject=subject, body=body)


def build_urgent_alert(record: SubmissionRecord, classification: Classification) -> MessagePayload | None:
    """Immediate-action alert, only for HIGH priority leads."""
    if classification.priority is not Priority.HIGH:
        return None

    reasons = "\n".join(f"- {reason}" for reason in classification.reasons)
    body = f"""HIGH PRIORITY LEAD ALERT

Client: {_or(record.name, NOT_PROVIDED)}
Email: {_or(record.email, NOT_PROVIDED)}
Phone: {_or(record.phone, NOT_PROVIDED)}

This lead requires immediate attention due to:
{reasons}

RECOMMENDED ACTION: Contact within 2 hours

Reference ID: {record.response_id}
"""
    return MessagePayload(
        kind="urgent_alert",
        recipient=settings.admin_email,
        subject="HIGH PRIORITY LEAD - Immediate Action Required",
        body=body,
    )


def build_notifications(record: SubmissionRecord, classification: Classification) -> list[MessagePayload]:
    """Client confirmation, admin alert and (HIGH only) urgent alert, in send order."""
    payloads = [
        build_client_confirmation(record),
        build_admin_alert(record, classification),
        build_urgent_alert(record, classification),
    ]
    return [p for p in payloads if p is not None]


def build_error_alert(error: BaseException, context: str = "") -> MessagePayload:
    """Admin alert for an unexpected fault while processing."""
    trace = "".join(traceback.format_exception(type(error), error, error.__traceback__)).strip()
    body = f"""System Error Detected:

Error: {type(error).__name__}: {error}
Context: {context or "Unknown"}
Time: {datetime.now(timezone.utc).isoformat()}

Traceback:
{trace or "Unavailable"}

Please check the service logs and resolve immediately.
"""
    return MessagePayload(
        kind="error_alert",
        recipient=settings.admin_email,
        subject=f"{settings.company_name} Intake Error Alert",
        body=body,
    )


def _format_counts(counts: dict[str, int]) -> str:
    if not counts:
        return "- None"
    return "\n".join(f"- {label}: {count}" for label, count in sorted(counts.items(), key=lambda kv: (-kv[1], kv[0])))


def build_daily_report(stats: DailyStats) -> MessagePayload:
    body = f"""{settings.company_name} - Daily Analytics Report
Date: {stats.date}

Key Metrics:
- Total Inquiries: {stats.total}
- High Priority Leads: {stats.by_priority.get(Priority.HIGH.value, 0)}
- Medium Priority Leads: {stats.by_priority.get(Priority.MEDIUM.value, 0)}
- Low Priority Leads: {stats.by_priority.get(Priority.LOW.value, 0)}
- Rush Projects: {stats.rush_projects}
- High Value Leads: {stats.high_value_leads}

Lead Sources:
{_format_counts(stats.lead_sources)}

Budget Distribution:
{_format_counts(stats.budget_distribution)}

Action Items:
- Follow up on high-priority leads
- Review pending proposals
- Update project timelines

Dashboard: {_dashboard_link()}
"""
    return MessagePayload(
        kind="daily_report",
        recipient=settings.admin_email,
        subject=f"Daily Analytics Report - {stats.date}",
        body=body,
    )


def build_health_check_report(report: ReadinessReport) -> MessagePayload:
    lines = "\n".join(
        f"- {name}: {'OK' if check.ok else 'FAILED'} ({check.detail})" for name, check in report.checks.items()
    )
    overall = "All systems operational." if report.ready else "One or more checks failed. Needs attention."
    body = f"""{settings.company_name} - System Health Check
Time: {datetime.now(timezone.utc).isoformat()}

Checks:
{lines}

Overall Status: {overall}
"""
    status = "OK" if report.ready else "NEEDS ATTENTION"
    return MessagePayload(
        kind="health_check",
        recipient=settings.admin_email,
        subject=f"{settings.company_name} System Health Check [{status}]",
        body=body,
    )
