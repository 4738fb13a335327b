from __future__ import annotations

from datetime import date, timedelta
from typing import Any, Iterable

import pandas as pd

from ai_heads.domain.models import coerce_project
from ai_heads.services.dates import local_today, parse_date
from ai_heads.services.risk import is_target_overdue

TIMELINE_COLUMNS = [
    "id",
    "title",
    "vendor",
    "heads",
    "status",
    "progress",
    "start",
    "end",
    "progress_end",
    "overdue",
]


def build_timeline_frame(projects: Iterable[Any], today: date | None = None) -> pd.DataFrame:
    """Gantt rows for projects that carry both a start and a target date."""
    today = today or local_today()
    rows: list[dict[str, Any]] = []
    for raw in projects or []:
        project = coerce_project(raw)
        if project is None:
            continue
        start = parse_date(project.start_date)
        end = parse_date(project.target_date)
        if start is None or end is None:
            continue
        span_days = max(1, (end - start).days)
        progress_end = start + timedelta(days=round(span_days * project.progress / 100))
        rows.append(
            {
                "id": project.id,
                "title": project.title,
                "vendor": project.vendor,
                "heads": ", ".join(project.ai_heads),
                "status": project.status,
                "progress": project.progress,
                "start": pd.Timestamp(start),
                "end": pd.Timestamp(end),
                "progress_end": pd.Timestamp(progress_end),
                "overdue": is_target_overdue(project, today),
            }
        )
    if not rows:
        return pd.DataFrame(columns=TIMELINE_COLUMNS)
    df = pd.DataFrame(rows, columns=TIMELINE_COLUMNS)
    return df.sort_values("start", kind="stable").reset_index(drop=True)


def timeline_bounds(
    df: pd.DataFrame,
    padding_days: int = 2,
) -> tuple[pd.Timestamp, pd.Timestamp] | None:
    if df.empty:
        return None
    padding = pd.Timedelta(days=padding_days)
    return df["start"].min() - padding, df["end"].max() + padding
