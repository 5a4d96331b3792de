from datetime import datetime

from sqlalchemy import String, cast, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from intake.db.models import Submission

# Columns staff may edit after intake
OPERATIONAL_FIELDS = ("status", "assigned_to", "follow_up_date", "estimated_value", "notes")


# ======================================================
# WRITE PATH (pipeline)
# ======================================================

async def create_submission(
    session: AsyncSession,
    *,
    response_id: str,
    priority: str,
    payload_json: dict,
    source: str = "form",
    **fields: str,
) -> Submission:
    """Append a submission row."""
    row = Submission(
        response_id=response_id,
        priority=priority,
        payload_json=payload_json,
        source=source,
        **fields,
    )
    session.add(row)
    await session.flush()
    return row


# ======================================================
# READ / STAFF OPERATIONS
# ======================================================

def _apply_filters(stmt, priority: str | None, status: str | None, search: str | None):
    if priority:
        stmt = stmt.where(Submission.priority == priority.upper())
    if status:
        stmt = stmt.where(Submission.status == status)
    if search:
        pattern = f"%{search}%"
        stmt = stmt.where(
            or_(
                Submission.response_id.ilike(pattern),
                Submission.name.ilike(pattern),
                Submission.email.ilike(pattern),
                Submission.company.ilike(pattern),
                cast(Submission.id, String).ilike(pattern),
            )
        )
    return stmt


async def list_submissions(
    session: AsyncSession,
    priority: str | None = None,
    status: str | None = None,
    search: str | None = None,
    limit: int = 50,
    offset: int = 0,
) -> list[Submission]:
    stmt = select(Submission).order_by(Submission.created_at.desc()).limit(limit).offset(offset)
    stmt = _apply_filters(stmt, priority, status, search)
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def count_submissions(
    session: AsyncSession,
    priority: str | None = None,
    status: str | None = None,
    search: str | None = None,
) -> int:
    stmt = select(func.count()).select_from(Submission)
    stmt = _apply_filters(stmt, priority, status, search)
    result = await session.execute(stmt)
    return result.scalar() or 0


async def get_submission(session: AsyncSession, response_id: str) -> Submission | None:
    stmt = select(Submission).where(Submission.response_id == response_id)
    result = await session.execute(stmt)
    return result.scalar_one_or_none()


async def update_submission(session: AsyncSession, response_id: str, **values) -> Submission:
    """Update operational columns only."""
    values = {k: v for k, v in values.items() if k in OPERATIONAL_FIELDS and v is not None}
    if not values:
        raise ValueError("No fields to update")

    stmt = (
        update(Submission)
        .where(Submission.response_id == response_id)
        .values(**values)
        .execution_options(synchronize_session="fetch")
    )
    await session.execute(stmt)
    await session.flush()
    result = await session.execute(select(Submission).where(Submission.response_id == response_id))
    return result.scalar_one()


async def submissions_between(session: AsyncSession, start: datetime, end: datetime) -> list[Submission]:
    """Submissions created in [start, end), oldest first."""
    stmt = (
        select(Submission)
        .where(Submission.created_at >= start, Submission.created_at < end)
        .order_by(Submission.created_at.asc())
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())
