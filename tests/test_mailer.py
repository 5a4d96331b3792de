import logging

import pytest

from intake.config import Settings
from intake.schemas.submission import MessagePayload
from intake.services.mailer import LogMailer, Mailer, SmtpMailer, build_mailer
from intake.services.storage import SubmissionSink

MESSAGE = MessagePayload(kind="admin_alert", recipient="admin@example.com", subject="Hi", body="Body")


def test_build_mailer_without_relay_is_dry_run() -> None:
    assert isinstance(build_mailer(Settings(smtp_host="")), LogMailer)
    assert isinstance(build_mailer(Settings(smtp_host="smtp.example.com", mail_dry_run=True)), LogMailer)
    assert isinstance(build_mailer(Settings(smtp_host="smtp.example.com")), SmtpMailer)


def test_smtp_message_headers() -> None:
    mailer = SmtpMailer(Settings(smtp_host="smtp.example.com", mail_from="contact@example.com"))
    email = mailer._build_message(MESSAGE)
    assert email["From"] == "contact@example.com"
    assert email["To"] == "admin@example.com"
    assert email["Subject"] == "Hi"
    assert email.get_content().strip() == "Body"


class FakeSMTP:
    instances = []

    def __init__(self, host, port, timeout):
        self.host, self.port, self.timeout = host, port, timeout
        self.calls = []
        FakeSMTP.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def starttls(self):
        self.calls.append("starttls")

    def login(self, user, password):
        self.calls.append(("login", user))

    def send_message(self, msg):
        self.calls.append(("send", msg["To"]))


@pytest.mark.asyncio
async def test_smtp_mailer_sends_through_relay(monkeypatch) -> None:
    monkeypatch.setattr("intake.services.mailer.smtplib.SMTP", FakeSMTP)
    FakeSMTP.instances.clear()
    config = Settings(smtp_host="smtp.example.com", smtp_port=2525, smtp_user="bot", smtp_password="pw", smtp_timeout=3)

    await SmtpMailer(config).send(MESSAGE)

    smtp = FakeSMTP.instances[0]
    assert (smtp.host, smtp.port, smtp.timeout) == ("smtp.example.com", 2525, 3)
    assert smtp.calls == ["starttls", ("login", "bot"), ("send", "admin@example.com")]


@pytest.mark.asyncio
async def test_log_mailer_never_raises() -> None:
    await LogMailer().send(MESSAGE)


def test_build_mailer_warns_when_no_relay_is_configured(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="intake.services.mailer"):
        assert isinstance(build_mailer(Settings(smtp_host="", mail_dry_run=False)), LogMailer)
    assert "SMTP_HOST is not set" in caplog.text

    caplog.clear()
    with caplog.at_level(logging.WARNING, logger="intake.services.mailer"):
        build_mailer(Settings(smtp_host="", mail_dry_run=True))
    assert caplog.text == ""


def test_incomplete_collaborators_fail_at_construction() -> None:
    class HalfMailer(Mailer):
        pass

    class HalfSink(SubmissionSink):
        async def save(self, record, payload, source="form"):
            return None

    with pytest.raises(TypeError):
        HalfMailer()
    with pytest.raises(TypeError):
        HalfSink()
