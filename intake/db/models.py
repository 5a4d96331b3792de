"""
Database model for stored inquiries.

Columns mirror the client-responses sheet: extracted fields, generated
response id and priority, plus operational columns the pipeline leaves for
staff to fill in.
"""

from datetime import datetime
from uuid import uuid4

from sqlalchemy import DateTime, String, Text, text
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class Submission(Base):
    """One processed inquiry (append-only from the pipeline's side)."""

    __tablename__ = "submissions"

    id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    response_id: Mapped[str] = mapped_column(String(32), nullable=False, unique=True, index=True)
    source: Mapped[str] = mapped_column(String(255), nullable=False, default="form")

    name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    email: Mapped[str] = mapped_column(String(255), nullable=False, default="", index=True)
    phone: Mapped[str] = mapped_column(String(64), nullable=False, default="")
    company: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    timeline: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    services_interested: Mapped[str] = mapped_column(Text, nullable=False, default="")
    project_type: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    package_tier: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    budget_range: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    requirements: Mapped[str] = mapped_column(Text, nullable=False, default="")
    familiarity_score: Mapped[str] = mapped_column(String(16), nullable=False, default="")
    lead_source: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    comments: Mapped[str] = mapped_column(Text, nullable=False, default="")
    marketing_consent: Mapped[str] = mapped_column(Text, nullable=False, default="")

    priority: Mapped[str] = mapped_column(
        String(20), nullable=False, index=True
    )  # LOW | MEDIUM | HIGH
    payload_json: Mapped[dict] = mapped_column(JSONB, nullable=False)

    # Operational columns, filled in by staff
    status: Mapped[str] = mapped_column(String(32), nullable=False, default="New")
    assigned_to: Mapped[str | None] = mapped_column(String(255), nullable=True)
    follow_up_date: Mapped[str | None] = mapped_column(
        String(50), nullable=True
    )  # ISO8601 date string
    estimated_value: Mapped[str | None] = mapped_column(String(64), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=text("now()"),
        index=True,
    )
