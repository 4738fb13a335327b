from __future__ import annotations

from dataclasses import dataclass
from datetime import date
import logging
from typing import Any, Iterable, Sequence

import pandas as pd

from ai_heads.domain.constants import (
    AI_HEADS,
    SCORE_RULES,
    STATUS_BLOCKED,
    STATUS_DONE,
    STATUS_IN_PROGRESS,
    ScoreRules,
)
from ai_heads.domain.models import HeadStats, Project, coerce_project
from ai_heads.services.dates import local_today
from ai_heads.services.risk import overdue_pending_approvals, pending_approvals

LOGGER = logging.getLogger(__name__)

RANK_BADGES = ("🏆 Leader", "🥈 Chasing")
DEFAULT_BADGE = "🔥 Comeback"

LEADERBOARD_COLUMNS = [
    "Rank",
    "Head",
    "Score",
    "Done",
    "In progress",
    "Blocked",
    "Pending approvals",
    "Overdue approvals",
    "Badge",
]


@dataclass
class _HeadBucket:
    head: str
    score: int = 0
    done: int = 0
    in_progress: int = 0
    blocked: int = 0
    pending_approvals: int = 0
    overdue_approvals: int = 0

    def freeze(self) -> HeadStats:
        return HeadStats(
            head=self.head,
            score=self.score,
            done=self.done,
            in_progress=self.in_progress,
            blocked=self.blocked,
            pending_approvals=self.pending_approvals,
            overdue_approvals=self.overdue_approvals,
        )


def project_score(
    project: Project,
    pending: int,
    overdue: int,
    rules: ScoreRules = SCORE_RULES,
) -> int:
    """Points one head earns from one project.

    The in-progress bonus applies to any unfinished project with progress,
    including blocked and not-started ones.
    """
    score = 0
    if project.status == STATUS_DONE:
        score += rules.done
    if project.status == STATUS_BLOCKED:
        score += rules.blocked
    if project.progress > 0 and project.status != STATUS_DONE:
        score += rules.in_progress
    score += pending * rules.pending_approval
    score += overdue * rules.overdue_approval
    return score


def compute_stats(
    projects: Iterable[Any] | None,
    roster: Sequence[str] = AI_HEADS,
    rules: ScoreRules = SCORE_RULES,
    today: date | None = None,
) -> list[HeadStats]:
    """Fold projects into one ranked ``HeadStats`` per roster head.

    A head listed twice on the same project is counted twice. Heads outside
    the roster are ignored. Ties keep roster order.
    """
    today = today or local_today()
    buckets: dict[str, _HeadBucket] = {}
    for head in roster:
        buckets.setdefault(head, _HeadBucket(head=head))

    for raw in projects or []:
        project = coerce_project(raw)
        if project is None:
            continue
        pending = len(pending_approvals(project))
        overdue = len(overdue_pending_approvals(project, today))
        delta = project_score(project, pending, overdue, rules)

        for head in project.ai_heads:
            bucket = buckets.get(head)
            if bucket is None:
                LOGGER.debug("Project %s references unknown head %r", project.id, head)
                continue

            if project.status == STATUS_DONE:
                bucket.done += 1
            elif project.status == STATUS_IN_PROGRESS:
                bucket.in_progress += 1
            elif project.status == STATUS_BLOCKED:
                bucket.blocked += 1

            bucket.pending_approvals += pending
            bucket.overdue_approvals += overdue
            bucket.score += delta

    ranked = sorted(buckets.values(), key=lambda b: b.score, reverse=True)
    return [bucket.freeze() for bucket in ranked]


def rank_badge(index: int) -> str:
    if 0 <= index < len(RANK_BADGES):
        return RANK_BADGES[index]
    return DEFAULT_BADGE


def leaderboard_frame(stats: Sequence[HeadStats]) -> pd.DataFrame:
    rows = [
        {
            "Rank": index + 1,
            "Head": s.head,
            "Score": s.score,
            "Done": s.done,
            "In progress": s.in_progress,
            "Blocked": s.blocked,
            "Pending approvals": s.pending_approvals,
            "Overdue approvals": s.overdue_approvals,
            "Badge": rank_badge(index),
        }
        for index, s in enumerate(stats)
    ]
    return pd.DataFrame(rows, columns=LEADERBOARD_COLUMNS)
