from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Any, Mapping


def _text(value: Any) -> str:
    if value is None:
        return ""
    try:
        return str(value)
    except ValueError:
        # ints past the interpreter's digit limit
        return ""


def _optional_text(value: Any) -> str | None:
    if value in (None, ""):
        return None
    return _text(value).strip() or None


def _to_float(value: Any) -> float | None:
    if value in (None, "") or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if number != number:
        return None
    return number


def _to_timestamp(value: Any) -> int | None:
    number = _to_float(value)
    if number is None or not math.isfinite(number):
        return None
    return int(number)


def clamp_progress(value: Any) -> int:
    """Coerce a raw progress value to an int percentage in 0-100 (0 if unusable).

    Any positive value stays positive, so ``progress > 0`` survives rounding.
    """
    if isinstance(value, int) and not isinstance(value, bool):
        return max(0, min(100, value))
    number = _to_float(value)
    if number is None:
        return 0
    clamped = max(0.0, min(100.0, number))
    rounded = int(round(clamped))
    if clamped > 0 and rounded == 0:
        return 1
    return rounded


def _pick(raw: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in raw:
            return raw[key]
    return None


@dataclass(frozen=True)
class Approval:
    id: str
    title: str
    owner: str = ""
    due_date: str | None = None
    state: str = ""

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> Approval:
        return cls(
            id=_text(raw.get("id")),
            title=_text(raw.get("title")),
            owner=_text(raw.get("owner")),
            due_date=_optional_text(_pick(raw, "dueDate", "due_date")),
            state=_text(raw.get("state")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "owner": self.owner,
            "dueDate": self.due_date,
            "state": self.state,
        }


@dataclass(frozen=True)
class Project:
    id: str
    title: str
    vendor: str = ""
    ai_heads: tuple[str, ...] = ()
    status: str = ""
    progress: int = 0
    start_date: str | None = None
    target_date: str | None = None
    approvals: tuple[Approval, ...] = ()
    updated_at: int | None = None

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> Project:
        """Build a project from its stored JSON shape.

        Never raises for a mapping: missing or malformed fields fall back to
        the weakest value (empty list, zero, ``None``).
        """
        heads_raw = _pick(raw, "aiHeads", "ai_heads")
        heads: tuple[str, ...] = ()
        if isinstance(heads_raw, (list, tuple)):
            heads = tuple(_text(h) for h in heads_raw if h not in (None, ""))

        approvals_raw = raw.get("approvals")
        approvals: tuple[Approval, ...] = ()
        if isinstance(approvals_raw, (list, tuple)):
            approvals = tuple(
                Approval.from_dict(item) for item in approvals_raw if isinstance(item, Mapping)
            )

        return cls(
            id=_text(raw.get("id")),
            title=_text(raw.get("title")),
            vendor=_text(raw.get("vendor")),
            ai_heads=heads,
            status=_text(raw.get("status")),
            progress=clamp_progress(raw.get("progress")),
            start_date=_optional_text(_pick(raw, "startDate", "start_date")),
            target_date=_optional_text(_pick(raw, "targetDate", "target_date")),
            approvals=approvals,
            updated_at=_to_timestamp(_pick(raw, "updatedAt", "updated_at")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "vendor": self.vendor,
            "aiHeads": list(self.ai_heads),
            "status": self.status,
            "progress": self.progress,
            "startDate": self.start_date,
            "targetDate": self.target_date,
            "approvals": [approval.to_dict() for approval in self.approvals],
            "updatedAt": self.updated_at,
        }


def coerce_project(value: Any) -> Project | None:
    if isinstance(value, Project):
        return value
    if isinstance(value, Mapping):
        return Project.from_dict(value)
    return None


@dataclass(frozen=True)
class HeadStats:
    head: str
    score: int = 0
    done: int = 0
    in_progress: int = 0
    blocked: int = 0
    pending_approvals: int = 0
    overdue_approvals: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "head": self.head,
            "score": self.score,
            "done": self.done,
            "inProgress": self.in_progress,
            "blocked": self.blocked,
            "pendingApprovals": self.pending_approvals,
            "overdueApprovals": self.overdue_approvals,
        }
