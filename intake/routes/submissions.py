"""
/submissions — form-submission webhook plus staff views of stored inquiries.

Flow:
  POST /submissions  →  extract fields, classify priority
                     →  store the row, send client/admin/urgent emails
                     →  returns the per-side-effect IntakeReport (always 202)
"""

import json
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from pydantic import BaseModel, Field, ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from intake.config import settings
from intake.db.repository import (
    count_submissions,
    get_submission,
    list_submissions,
    update_submission,
)
from intake.db.session import get_session
from intake.schemas.submission import IntakeReport, SubmissionEvent
from intake.services.mailer import build_mailer
from intake.services.pipeline import IntakePipeline
from intake.services.storage import SqlSubmissionSink

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/submissions", tags=["submissions"])


def get_pipeline() -> IntakePipeline:
    return IntakePipeline(build_mailer(), SqlSubmissionSink())


def _payload_too_large() -> HTTPException:
    return HTTPException(
        status_code=413,
        detail=f"Payload too large. Maximum size is {settings.max_payload_bytes} bytes.",
    )


# ============================================================
# Pydantic schemas
# ============================================================

class SubmissionUpdateRequest(BaseModel):
    status: Optional[str] = Field(None, examples=["New", "Contacted", "Proposal Sent", "Won", "Lost"])
    assigned_to: Optional[str] = None
    follow_up_date: Optional[str] = Field(None, examples=["2026-02-18"])
    estimated_value: Optional[str] = Field(None, examples=["$8,000"])
    notes: Optional[str] = None


class SubmissionResponse(BaseModel):
    id: str
    response_id: str
    source: str
    priority: str
    name: str
    email: str
    phone: str
    company: str
    timeline: str
    services_interested: str
    project_type: str
    package_tier: str
    budget_range: str
    requirements: str
    familiarity_score: str
    lead_source: str
    comments: str
    marketing_consent: str
    status: str
    assigned_to: Optional[str]
    follow_up_date: Optional[str]
    estimated_value: Optional[str]
    notes: Optional[str]
    created_at: str

    @classmethod
    def from_row(cls, row) -> "SubmissionResponse":
        return cls(
            id=str(row.id),
            response_id=row.response_id,
            source=row.source,
            priority=row.priority,
            name=row.name,
            email=row.email,
            phone=row.phone,
            company=row.company,
            timeline=row.timeline,
            services_interested=row.services_interested,
            project_type=row.project_type,
            package_tier=row.package_tier,
            budget_range=row.budget_range,
            requirements=row.requirements,
            familiarity_score=row.familiarity_score,
            lead_source=row.lead_source,
            comments=row.comments,
            marketing_consent=row.marketing_consent,
            status=row.status,
            assigned_to=row.assigned_to,
            follow_up_date=row.follow_up_date,
            estimated_value=row.estimated_value,
            notes=row.notes,
            created_at=row.created_at.isoformat() if row.created_at else "",
        )


class SubmissionListResponse(BaseModel):
    submissions: list[SubmissionResponse]
    total: int
    limit: int
    offset: int


# ============================================================
# FORM WEBHOOK  POST /submissions
# ============================================================

@router.post("", response_model=IntakeReport, status_code=202)
async def submit_form(request: Request, pipeline: IntakePipeline = Depends(get_pipeline)):
    """
    Process one completed form submission.

    The submitter's confirmation never depends on downstream delivery:
    delivery and storage failures are reported per side effect in the body.
    """
    # ── 0. Size guard (header fast path, then the body actually read) ───────
    content_length = request.headers.get("content-length")
    if content_length:
        try:
            declared = int(content_length)
        except ValueError:
            raise HTTPException(status_code=400, detail="Invalid Content-Length header.")
        if declared > settings.max_payload_bytes:
            raise _payload_too_large()

    body = await request.body()
    if len(body) > settings.max_payload_bytes:
        raise _payload_too_large()

    # ── 1. Parse body ────────────────────────────────────────────────────────
    try:
        payload = json.loads(body)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid JSON body.")

    if not isinstance(payload, dict):
        raise HTTPException(status_code=400, detail="Payload must be a JSON object.")

    try:
        event = SubmissionEvent.model_validate(payload)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=f"Invalid submission: {e.errors(include_url=False)}")

    # ── 2. Triage ────────────────────────────────────────────────────────────
    return await pipeline.handle_submission(event)


# ============================================================
# LIST  GET /submissions
# ============================================================

@router.get("", response_model=SubmissionListResponse)
async def list_submissions_api(
    priority: Optional[str] = Query(None, description="Filter: LOW | MEDIUM | HIGH"),
    status: Optional[str] = Query(None, description="Filter by follow-up status"),
    search: Optional[str] = Query(None, description="Search response ID, name, email or company"),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    session: AsyncSession = Depends(get_session),
):
    """Return paginated, optionally filtered list of stored inquiries."""
    rows = await list_submissions(session, priority=priority, status=status, search=search, limit=limit, offset=offset)
    total = await count_submissions(session, priority=priority, status=status, search=search)

    return SubmissionListResponse(
        submissions=[SubmissionResponse.from_row(r) for r in rows],
        total=total,
        limit=limit,
        offset=offset,
    )


# ============================================================
# GET ONE  GET /submissions/{response_id}
# ============================================================

@router.get("/{response_id}", response_model=SubmissionResponse)
async def get_submission_api(response_id: str, session: AsyncSession = Depends(get_session)):
    row = await get_submission(session, response_id)
    if not row:
        raise HTTPException(status_code=404, detail="Submission not found.")
    return SubmissionResponse.from_row(row)


# ============================================================
# UPDATE  PATCH /submissions/{response_id}
# ============================================================

@router.patch("/{response_id}", response_model=SubmissionResponse)
async def update_submission_api(
    response_id: str,
    data: SubmissionUpdateRequest,
    session: AsyncSession = Depends(get_session),
):
    """Update follow-up columns (status, assignee, follow-up date, value, notes)."""
    values = data.model_dump(exclude_none=True)
    if not values:
        raise HTTPException(
            status_code=400,
            detail="Provide at least one field: status, assigned_to, follow_up_date, estimated_value, or notes.",
        )

    row = await get_submission(session, response_id)
    if not row:
        raise HTTPException(status_code=404, detail="Submission not found.")

    updated = await update_submission(session, response_id, **values)
    await session.commit()
    logger.info("Updated submission %s: %s", response_id, ", ".join(sorted(values)))
    return SubmissionResponse.from_row(updated)
