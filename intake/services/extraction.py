"""
Field extraction: raw form answers -> SubmissionRecord.

Labels are matched by case-sensitive substring containment so cosmetic edits
to the form wording don't break the mapping. Every label is tested against
every rule in FIELD_RULES order; a later matching rule overwrites an earlier
one, and a later label overwrites an earlier label for the same attribute.
"""

import logging
from collections.abc import Mapping, Sequence
from uuid import uuid4

from intake.config import settings
from intake.schemas.submission import SubmissionRecord

logger = logging.getLogger(__name__)

# (label substring, SubmissionRecord attribute)
FIELD_RULES: tuple[tuple[str, str], ...] = (
    ("Full Name", "name"),
    ("Email", "email"),
    ("Phone", "phone"),
    ("Company", "company"),
    ("Timeline", "timeline"),
    ("services", "services_interested"),
    ("Budget", "budget_range"),
    ("Requirements", "requirements"),
    ("project type", "project_type"),
    ("Package Tier", "package_tier"),
    ("familiar", "familiarity_score"),
    ("hear about", "lead_source"),
    ("Comments", "comments"),
    ("Communication Preferences", "marketing_consent"),
)

MULTI_SELECT_SEPARATOR = ", "


def generate_response_id(prefix: str | None = None) -> str:
    """Prefix + 8 random uppercase hex characters, e.g. IAH-3F9A1C07."""
    if prefix is None:
        prefix = settings.response_id_prefix
    return f"{prefix}{uuid4().hex[:8].upper()}"


def normalize_answer(value: object) -> str:
    """Flatten one answer to text; multi-select lists keep selection order."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, Sequence):
        parts = [normalize_answer(v) for v in value]
        return MULTI_SELECT_SEPARATOR.join(p for p in parts if p)
    return str(value).strip()


def match_fields(label: str) -> list[str]:
    """Attributes whose key is contained in the label, in FIELD_RULES order."""
    return [attr for key, attr in FIELD_RULES if key in label]


def extract_submission(answers: Mapping[str, object], response_id: str) -> SubmissionRecord:
    """
    Build a SubmissionRecord from a label -> answer mapping.

    Pure: no I/O, same input gives an equal record. Unmatched labels are
    ignored. No format validation happens here.
    """
    fields: dict[str, str] = {}
    for label, value in answers.items():
        attrs = match_fields(label)
        if not attrs:
            logger.debug("Ignoring unmatched label %r", label)
            continue
        text = normalize_answer(value)
        for attr in attrs:
            fields[attr] = text

    return SubmissionRecord(response_id=response_id, **fields)
