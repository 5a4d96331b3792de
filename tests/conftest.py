"""
Pytest configuration and fixtures
"""
import pytest

from intake.config import settings
from intake.schemas.submission import MessagePayload, SubmissionRecord
from intake.services.mailer import Mailer
from intake.services.storage import SubmissionSink

ADMIN = "admin@example.com"


class RecordingMailer(Mailer):
    """Collects sent messages; fails for the kinds listed in fail_kinds."""

    def __init__(self, fail_kinds=()):
        self.sent: list[MessagePayload] = []
        self.fail_kinds = set(fail_kinds)

    async def send(self, message: MessagePayload) -> None:
        if message.kind in self.fail_kinds:
            raise ConnectionError(f"smtp down for {message.kind}")
        self.sent.append(message)


class MemorySink(SubmissionSink):
    def __init__(self, fail=False, rows=()):
        self.saved: list[tuple[SubmissionRecord, dict, str]] = []
        self.fail = fail
        self.rows = list(rows)
        self.queried = None

    async def save(self, record, payload, source="form"):
        if self.fail:
            raise RuntimeError("database unavailable")
        self.saved.append((record, payload, source))

    async def between(self, start, end):
        self.queried = (start, end)
        return self.rows


@pytest.fixture(autouse=True)
def _settings(monkeypatch):
    monkeypatch.setattr(settings, "admin_email", ADMIN)
    monkeypatch.setattr(settings, "company_name", "The IAH Creations")
    monkeypatch.setattr(settings, "enable_email_notifications", True)
    monkeypatch.setattr(settings, "priority_policy", "sequential")
    monkeypatch.setattr(settings, "response_id_prefix", "IAH-")
    monkeypatch.setattr(settings, "dashboard_url", "")


@pytest.fixture
def mailer():
    return RecordingMailer()


@pytest.fixture
def sink():
    return MemorySink()


@pytest.fixture
def form_answers():
    """Answers keyed by the real form question titles."""
    return {
        "Full Name": "Ada Lovelace",
        "Email Address": "ada@example.com",
        "Phone Number": "+1 555-123-4567",
        "Company/Organization (Optional)": "Analytical Engines Ltd",
        "Expected Project Timeline": "Within 1 month",
        "Which services are you interested in?": [
            "1. Website Creations (SPW / Multi-Page)",
            "2. Web App Creations (SPA / Multi-Tasking)",
        ],
        "Select your specific project type (if known):": "2.2 Multi-Tasking Dynamic App (SaaS, CRM, ERP)",
        "Preferred Package Tier": "Medium (Standard features + Integrations)",
        "Estimated Budget Range (USD)": "$2,000 - $5,000 (Standard)",
        "Detailed Project Requirements": "A CRM with payment gateway.",
        "How familiar are you with our 'Innovate, Automate, Host' model?": "4",
        "How did you hear about us?": "Google Search",
        "Additional Questions or Comments": "",
        "Communication Preferences": ["I agree to receive project updates via email"],
    }
