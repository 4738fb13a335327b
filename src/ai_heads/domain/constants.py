from __future__ import annotations

from dataclasses import dataclass

AI_HEADS: tuple[str, ...] = ("Badri", "Avisek", "Shourya")

VENDORS: tuple[str, ...] = ("Agilisium", "Medhastra", "Darsa", "Vendor 4")

STATUS_NOT_STARTED = "Not Started"
STATUS_IN_PROGRESS = "In Progress"
STATUS_BLOCKED = "Blocked"
STATUS_DONE = "Done"

PROJECT_STATUSES: tuple[str, ...] = (
    STATUS_NOT_STARTED,
    STATUS_IN_PROGRESS,
    STATUS_BLOCKED,
    STATUS_DONE,
)

APPROVAL_PENDING = "Pending"
APPROVAL_APPROVED = "Approved"
APPROVAL_REJECTED = "Rejected"

APPROVAL_STATES: tuple[str, ...] = (
    APPROVAL_PENDING,
    APPROVAL_APPROVED,
    APPROVAL_REJECTED,
)

# Storage keys (kv_store rows)
PROJECTS_KEY = "ai_heads_projects"
USER_KEY = "ai_heads_user"


@dataclass(frozen=True)
class ScoreRules:
    done: int = 50
    in_progress: int = 5
    blocked: int = -10
    pending_approval: int = -2
    overdue_approval: int = -10


SCORE_RULES = ScoreRules()

STATUS_COLORS: dict[str, str] = {
    STATUS_DONE: "#059669",
    STATUS_BLOCKED: "#E11D48",
    STATUS_IN_PROGRESS: "#2563EB",
    STATUS_NOT_STARTED: "#64748B",
}
