from __future__ import annotations

from dataclasses import replace
import time
from typing import Any, Sequence
from uuid import uuid4

from ai_heads.domain.constants import (
    AI_HEADS,
    APPROVAL_PENDING,
    APPROVAL_STATES,
    PROJECT_STATUSES,
    STATUS_NOT_STARTED,
    VENDORS,
)
from ai_heads.domain.models import Approval, Project, clamp_progress
from ai_heads.services.dates import parse_date


def _new_id(prefix: str) -> str:
    return f"{prefix}{uuid4().hex[:8]}"


def _date_or_none(value: Any, label: str) -> str | None:
    if value in (None, ""):
        return None
    parsed = parse_date(value)
    if parsed is None:
        raise ValueError(f"{label} must be a date (YYYY-MM-DD).")
    return parsed.isoformat()


def new_approval(title: str, owner: str = "", due_date: Any = None) -> Approval:
    clean_title = (title or "").strip()
    if not clean_title:
        raise ValueError("Approval title is required.")
    return Approval(
        id=_new_id("a"),
        title=clean_title,
        owner=(owner or "").strip(),
        due_date=_date_or_none(due_date, "Approval due date"),
        state=APPROVAL_PENDING,
    )


def set_approval_state(project: Project, approval_id: str, state: str) -> Project:
    if state not in APPROVAL_STATES:
        raise ValueError(f"Unknown approval state: {state}")
    approvals = tuple(
        replace(a, state=state) if a.id == approval_id else a for a in project.approvals
    )
    return replace(project, approvals=approvals, updated_at=int(time.time() * 1000))


def build_project(
    payload: dict[str, Any],
    existing: Project | None = None,
    roster: Sequence[str] = AI_HEADS,
) -> Project:
    """Validate editor input and return the project to store.

    Raises ``ValueError`` with a message fit for display.
    """
    title = str(payload.get("title") or "").strip()
    if not title:
        raise ValueError("Project title is required.")

    vendor = str(payload.get("vendor") or "").strip()
    if vendor not in VENDORS:
        raise ValueError(f"Vendor must be one of: {', '.join(VENDORS)}.")

    status = str(payload.get("status") or STATUS_NOT_STARTED)
    if status not in PROJECT_STATUSES:
        raise ValueError(f"Unknown status: {status}")

    heads = tuple(h for h in payload.get("ai_heads") or [] if h in roster)

    start_date = _date_or_none(payload.get("start_date"), "Start date")
    target_date = _date_or_none(payload.get("target_date"), "Target date")
    if start_date and target_date and target_date < start_date:
        raise ValueError("Target date cannot be before the start date.")

    approvals = payload.get("approvals")
    if approvals is None:
        approvals = existing.approvals if existing else ()

    return Project(
        id=existing.id if existing else _new_id("p"),
        title=title,
        vendor=vendor,
        ai_heads=heads,
        status=status,
        progress=clamp_progress(payload.get("progress")),
        start_date=start_date,
        target_date=target_date,
        approvals=tuple(approvals),
        updated_at=int(time.time() * 1000),
    )


def add_approval(project: Project, approval: Approval) -> Project:
    return replace(
        project,
        approvals=(*project.approvals, approval),
        updated_at=int(time.time() * 1000),
    )


def approval_state_options(current: str) -> list[str]:
    """Selectable states, keeping a stored state outside ``APPROVAL_STATES``."""
    options = list(APPROVAL_STATES)
    if current and current not in options:
        options.append(current)
    return options


def approval_state_change(approval: Approval, chosen: str | None) -> str | None:
    """The new state to store, or ``None`` when the pick leaves it unchanged."""
    if not chosen or chosen == approval.state:
        return None
    if chosen not in APPROVAL_STATES:
        return None
    return chosen
