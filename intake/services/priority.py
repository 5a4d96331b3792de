"""
Priority classification.

Rules are evaluated in PRIORITY_RULES order. Under the default "sequential"
policy every matching rule overwrites the running tier, so the last match
wins: an ASAP lead that is also "Just exploring" ends up LOW. The "highest"
policy takes the most severe matching tier instead and is opt-in through
Settings.priority_policy.

The reasons returned alongside the tier are the only source for the urgent
alert text; nothing downstream re-checks the raw fields.
"""

from dataclasses import dataclass
from typing import Literal

from intake.config import settings
from intake.schemas.submission import Classification, Priority, SubmissionRecord

PriorityPolicy = Literal["sequential", "highest"]

_SEVERITY = {Priority.LOW: 0, Priority.MEDIUM: 1, Priority.HIGH: 2}


@dataclass(frozen=True)
class PriorityRule:
    name: str
    tier: Priority
    field: str
    needles: tuple[str, ...]
    reason: str

    def matches(self, record: SubmissionRecord) -> bool:
        value = getattr(record, self.field) or ""
        return any(needle in value for needle in self.needles)


PRIORITY_RULES: tuple[PriorityRule, ...] = (
    PriorityRule(
        name="asap_timeline",
        tier=Priority.HIGH,
        field="timeline",
        needles=("ASAP",),
        reason="URGENT timeline requirement",
    ),
    PriorityRule(
        name="high_budget",
        tier=Priority.HIGH,
        field="budget_range",
        needles=("$15,000+", "Enterprise"),
        reason="High budget potential",
    ),
    PriorityRule(
        name="mobile_application",
        tier=Priority.HIGH,
        field="services_interested",
        needles=("Mobile Application",),
        reason="Mobile application project",
    ),
    PriorityRule(
        name="just_exploring",
        tier=Priority.LOW,
        field="timeline",
        needles=("Just exploring",),
        reason="Client is just exploring options",
    ),
    PriorityRule(
        name="needs_consultation",
        tier=Priority.LOW,
        field="budget_range",
        needles=("Need consultation",),
        reason="Budget needs consultation",
    ),
)


def classify(
    record: SubmissionRecord,
    policy: PriorityPolicy | None = None,
    rules: tuple[PriorityRule, ...] = PRIORITY_RULES,
) -> Classification:
    """Map a record to exactly one tier. Never raises."""
    policy = policy or settings.priority_policy
    matched = [rule for rule in rules if rule.matches(record)]

    priority = Priority.MEDIUM
    if policy == "highest":
        priority = max((rule.tier for rule in matched), key=_SEVERITY.__getitem__, default=Priority.MEDIUM)
    else:
        for rule in matched:
            priority = rule.tier

    return Classification(
        priority=priority,
        matched_rules=tuple(rule.name for rule in matched),
        reasons=tuple(rule.reason for rule in matched if rule.tier is priority),
    )
