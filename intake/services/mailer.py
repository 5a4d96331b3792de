"""
Mail delivery collaborators.

SmtpMailer talks to a real SMTP relay in a worker thread; LogMailer only
logs (dry run, or no relay configured). Both raise on failure and leave
containment to the caller.
"""

import asyncio
import logging
import smtplib
from abc import ABC, abstractmethod
from email.message import EmailMessage

from intake.config import Settings, settings
from intake.schemas.submission import MessagePayload

logger = logging.getLogger(__name__)


class Mailer(ABC):
    @abstractmethod
    async def send(self, message: MessagePayload) -> None:
        ...


class LogMailer(Mailer):
    """Logs outbound messages instead of sending them."""

    async def send(self, message: MessagePayload) -> None:
        logger.info("[dry-run] %s to %s: %s", message.kind, message.recipient, message.subject)


class SmtpMailer(Mailer):
    def __init__(self, config: Settings) -> None:
        self._config = config

    def _build_message(self, message: MessagePayload) -> EmailMessage:
        email = EmailMessage()
        email["From"] = self._config.mail_from
        email["To"] = message.recipient
        email["Subject"] = message.subject
        email.set_content(message.body)
        return email

    def _send_sync(self, message: MessagePayload) -> None:
        cfg = self._config
        with smtplib.SMTP(cfg.smtp_host, cfg.smtp_port, timeout=cfg.smtp_timeout) as smtp:
            if cfg.smtp_use_tls:
                smtp.starttls()
            if cfg.smtp_user:
                smtp.login(cfg.smtp_user, cfg.smtp_password)
            smtp.send_message(self._build_message(message))

    async def send(self, message: MessagePayload) -> None:
        # smtplib blocks; keep it off the event loop
        await asyncio.to_thread(self._send_sync, message)
        logger.info("Sent %s to %s", message.kind, message.recipient)


def build_mailer(config: Settings = settings) -> Mailer:
    """Pick the mailer for this configuration."""
    if config.mail_dry_run:
        return LogMailer()
    if not config.smtp_host:
        logger.warning("SMTP_HOST is not set; outbound mail will only be logged")
        return LogMailer()
    return SmtpMailer(config)
