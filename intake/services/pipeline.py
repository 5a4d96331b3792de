"""
Intake triage pipeline.

raw answers -> extraction -> classification -> persistence + notifications.

Side effects are independent and best-effort: each one is attempted, its
failure is logged and recorded in the IntakeReport, and the remaining ones
still run. Nothing here is retried or rolled back.
"""

import logging

from intake.config import settings
from intake.schemas.submission import (
    DeliveryResult,
    IntakeReport,
    MessagePayload,
    SubmissionEvent,
    SubmissionRecord,
)
from intake.services.extraction import extract_submission, generate_response_id
from intake.services.mailer import Mailer
from intake.services.notifications import build_error_alert, build_notifications
from intake.services.priority import PriorityPolicy, classify
from intake.services.storage import SubmissionSink

logger = logging.getLogger(__name__)

PERSISTENCE_TARGET = "persistence"


class IntakePipeline:
    def __init__(
        self,
        mailer: Mailer,
        sink: SubmissionSink,
        *,
        notifications_enabled: bool | None = None,
        policy: PriorityPolicy | None = None,
    ) -> None:
        self._mailer = mailer
        self._sink = sink
        self._notifications_enabled = (
            settings.enable_email_notifications if notifications_enabled is None else notifications_enabled
        )
        self._policy = policy

    async def handle_submission(self, event: SubmissionEvent) -> IntakeReport:
        """
        Top-level handler for one submission event.

        Never raises: unexpected faults are logged, reported to the admin by
        email (best-effort) and returned as a failed report.
        """
        response_id = generate_response_id()
        try:
            return await self.process(event, response_id)
        except Exception as exc:
            logger.exception("Form submission %s failed", response_id)
            await self.report_error(exc, context=f"submission {response_id}")
            return IntakeReport(response_id=response_id, status="failed", error=str(exc))

    async def process(self, event: SubmissionEvent, response_id: str | None = None) -> IntakeReport:
        response_id = response_id or generate_response_id()
        record = extract_submission(event.answers, response_id)
        classification = classify(record, self._policy)
        record = record.model_copy(update={"priority": classification.priority})

        report = IntakeReport(
            response_id=response_id,
            priority=classification.priority,
            reasons=list(classification.reasons),
        )

        report.results.append(await self._persist(record, event))

        if self._notifications_enabled:
            for payload in build_notifications(record, classification):
                report.results.append(await self._deliver(payload))

        if not all(result.ok for result in report.results):
            report.status = "partial"

        logger.info(
            "Form submission processed: %s priority=%s status=%s",
            response_id,
            classification.priority.value,
            report.status,
        )
        return report

    async def report_error(self, error: BaseException, context: str = "") -> None:
        """Send an error alert to the admin; a failure here is only logged."""
        if not settings.admin_email:
            return
        try:
            await self._mailer.send(build_error_alert(error, context))
        except Exception:
            logger.exception("Critical error - cannot send error notification")

    async def _persist(self, record: SubmissionRecord, event: SubmissionEvent) -> DeliveryResult:
        try:
            await self._sink.save(record, {"answers": event.answers, "source": event.source}, event.source)
        except Exception as exc:
            logger.exception("Could not store submission %s", record.response_id)
            return DeliveryResult(target=PERSISTENCE_TARGET, ok=False, error=str(exc))
        return DeliveryResult(target=PERSISTENCE_TARGET, ok=True)

    async def _deliver(self, payload: MessagePayload) -> DeliveryResult:
        try:
            await self._mailer.send(payload)
        except Exception as exc:
            logger.exception("Could not send %s to %s", payload.kind, payload.recipient)
            return DeliveryResult(target=payload.kind, ok=False, error=str(exc))
        return DeliveryResult(target=payload.kind, ok=True)
