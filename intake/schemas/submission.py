"""
Pydantic schemas for the intake triage pipeline.

Records are frozen: a submission is built once, classified once, then handed
off to the persistence and mail collaborators.
"""

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class Priority(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class SubmissionRecord(BaseModel):
    """One client inquiry, normalized from the raw form answers."""

    model_config = ConfigDict(frozen=True)

    response_id: str = Field(..., min_length=1)
    name: str = ""
    email: str = ""
    phone: str = ""
    company: str = ""
    timeline: str = ""
    services_interested: str = ""
    budget_range: str = ""
    requirements: str = ""
    project_type: str = ""
    package_tier: str = ""
    familiarity_score: str = ""
    lead_source: str = ""
    comments: str = ""
    marketing_consent: str = ""
    # Derived by classification, never taken from the submitter
    priority: Priority | None = None


class Classification(BaseModel):
    """Priority tier plus the rules that produced it."""

    model_config = ConfigDict(frozen=True)

    priority: Priority = Priority.MEDIUM
    matched_rules: tuple[str, ...] = ()
    reasons: tuple[str, ...] = ()


MessageKind = Literal[
    "client_confirmation",
    "admin_alert",
    "urgent_alert",
    "error_alert",
    "daily_report",
    "health_check",
]


class MessagePayload(BaseModel):
    """Outbound email handed to the mail delivery collaborator."""

    kind: MessageKind
    recipient: str
    subject: str
    body: str


class DeliveryResult(BaseModel):
    """Outcome of one side effect (a mail send or the persistence write)."""

    target: str
    ok: bool
    error: str | None = None


class IntakeReport(BaseModel):
    """Result of processing one submission, one entry per side effect."""

    response_id: str | None = None
    priority: Priority | None = None
    reasons: list[str] = Field(default_factory=list)
    status: Literal["processed", "partial", "failed"] = "processed"
    results: list[DeliveryResult] = Field(default_factory=list)
    error: str | None = None


class SubmissionEvent(BaseModel):
    """Inbound form-submission event: question label -> answer(s)."""

    answers: dict[str, Any]
    source: str = "form"


class DailyStats(BaseModel):
    """Aggregates for the daily analytics report."""

    date: str
    total: int = 0
    by_priority: dict[str, int] = Field(default_factory=dict)
    rush_projects: int = 0
    high_value_leads: int = 0
    lead_sources: dict[str, int] = Field(default_factory=dict)
    budget_distribution: dict[str, int] = Field(default_factory=dict)


class CheckResult(BaseModel):
    ok: bool
    detail: str = ""


class ReadinessReport(BaseModel):
    """Deployment verification: storage reachable, notification addresses set."""

    ready: bool
    checks: dict[str, CheckResult] = Field(default_factory=dict)
