from __future__ import annotations

from datetime import date
from typing import Any, Iterable

from ai_heads.domain.constants import (
    STATUS_BLOCKED,
    STATUS_DONE,
    STATUS_IN_PROGRESS,
    STATUS_NOT_STARTED,
)
from ai_heads.domain.models import Project, coerce_project
from ai_heads.services.dates import local_today
from ai_heads.services.risk import is_at_risk, overdue_pending_approvals, pending_approvals

ALL_OPTION = "All"


def _active(value: str | None) -> bool:
    return bool(value) and value != ALL_OPTION


def _haystack(project: Project) -> str:
    parts = [project.title, project.vendor, *project.ai_heads]
    for approval in project.approvals:
        parts.append(approval.title)
        parts.append(approval.owner)
    return " ".join(parts).casefold()


def filter_projects(
    projects: Iterable[Any],
    head: str | None = None,
    vendor: str | None = None,
    status: str | None = None,
    query: str = "",
) -> list[Project]:
    needle = (query or "").strip().casefold()
    result: list[Project] = []
    for raw in projects or []:
        project = coerce_project(raw)
        if project is None:
            continue
        if _active(head) and head not in project.ai_heads:
            continue
        if _active(vendor) and project.vendor != vendor:
            continue
        if _active(status) and project.status != status:
            continue
        if needle and needle not in _haystack(project):
            continue
        result.append(project)
    return result


def compute_kpis(projects: Iterable[Any], today: date | None = None) -> dict[str, int]:
    today = today or local_today()
    parsed = [p for p in (coerce_project(raw) for raw in projects or []) if p is not None]
    status_counts = {
        STATUS_DONE: 0,
        STATUS_IN_PROGRESS: 0,
        STATUS_BLOCKED: 0,
        STATUS_NOT_STARTED: 0,
    }
    for project in parsed:
        if project.status in status_counts:
            status_counts[project.status] += 1

    avg_progress = 0
    if parsed:
        avg_progress = round(sum(p.progress for p in parsed) / len(parsed))

    return {
        "total": len(parsed),
        "done": status_counts[STATUS_DONE],
        "in_progress": status_counts[STATUS_IN_PROGRESS],
        "blocked": status_counts[STATUS_BLOCKED],
        "not_started": status_counts[STATUS_NOT_STARTED],
        "at_risk": sum(1 for p in parsed if is_at_risk(p, today)),
        "pending_approvals": sum(len(pending_approvals(p)) for p in parsed),
        "overdue_approvals": sum(len(overdue_pending_approvals(p, today)) for p in parsed),
        "avg_progress": avg_progress,
    }
