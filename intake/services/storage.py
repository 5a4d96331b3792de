"""Persistence sink for classified submissions."""

import logging
from abc import ABC, abstractmethod
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from intake.db.models import Submission
from intake.db.repository import create_submission, submissions_between
from intake.db.session import async_session
from intake.schemas.submission import SubmissionRecord

logger = logging.getLogger(__name__)


class SubmissionSink(ABC):
    @abstractmethod
    async def save(self, record: SubmissionRecord, payload: dict, source: str = "form") -> None:
        ...

    @abstractmethod
    async def between(self, start: datetime, end: datetime) -> list[Submission]:
        ...


class SqlSubmissionSink(SubmissionSink):
    """Appends one row per submission; one short transaction per call."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession] = async_session) -> None:
        self._session_factory = session_factory

    async def save(self, record: SubmissionRecord, payload: dict, source: str = "form") -> None:
        if record.priority is None:
            raise ValueError(f"Submission {record.response_id} has not been classified")

        fields = record.model_dump(exclude={"response_id", "priority"})
        async with self._session_factory() as session:
            await create_submission(
                session,
                response_id=record.response_id,
                priority=record.priority.value,
                payload_json=payload,
                source=source,
                **fields,
            )
            await session.commit()
        logger.info("Stored submission %s", record.response_id)

    async def between(self, start: datetime, end: datetime) -> list[Submission]:
        async with self._session_factory() as session:
            return await submissions_between(session, start, end)
