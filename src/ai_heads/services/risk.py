from __future__ import annotations

from datetime import date
from typing import Any

from ai_heads.domain.constants import APPROVAL_PENDING, STATUS_BLOCKED, STATUS_DONE
from ai_heads.domain.models import Approval, Project, coerce_project
from ai_heads.services.dates import is_overdue


def pending_approvals(project: Project) -> list[Approval]:
    return [a for a in project.approvals if a.state == APPROVAL_PENDING]


def overdue_pending_approvals(project: Any, today: date | None = None) -> list[Approval]:
    parsed = coerce_project(project)
    if parsed is None:
        return []
    return [a for a in pending_approvals(parsed) if is_overdue(a.due_date, today)]


def is_target_overdue(project: Any, today: date | None = None) -> bool:
    parsed = coerce_project(project)
    if parsed is None:
        return False
    return parsed.status != STATUS_DONE and is_overdue(parsed.target_date, today)


def is_at_risk(project: Any, today: date | None = None) -> bool:
    """Blocked, past its target date while not done, or holding an overdue pending approval."""
    parsed = coerce_project(project)
    if parsed is None:
        return False
    if parsed.status == STATUS_BLOCKED:
        return True
    if is_target_overdue(parsed, today):
        return True
    return bool(overdue_pending_approvals(parsed, today))
