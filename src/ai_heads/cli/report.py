from __future__ import annotations

import argparse
from datetime import date
import json
import logging
from typing import Any

from ai_heads.data.db import connect, default_db_path, init_db
from ai_heads.data.seed import ensure_seed_data
from ai_heads.data.storage import SqliteProjectStore
from ai_heads.domain.constants import STATUS_BLOCKED
from ai_heads.domain.models import Project
from ai_heads.services.dates import days_overdue
from ai_heads.services.risk import is_at_risk, is_target_overdue, overdue_pending_approvals
from ai_heads.services.scoring import compute_stats, leaderboard_frame

LOGGER = logging.getLogger(__name__)


def _parse_today(value: str | None) -> date:
    if not value:
        return date.today()
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise ValueError("Invalid --today date (expected YYYY-MM-DD).") from exc


def _at_risk_rows(projects: list[Project], today: date) -> list[dict[str, Any]]:
    rows = []
    for project in projects:
        if not is_at_risk(project, today):
            continue
        reasons = []
        if project.status == STATUS_BLOCKED:
            reasons.append("blocked")
        if is_target_overdue(project, today):
            reasons.append(f"target overdue {days_overdue(project.target_date, today)}d")
        overdue = overdue_pending_approvals(project, today)
        if overdue:
            reasons.append(f"{len(overdue)} overdue approval(s)")
        rows.append(
            {
                "id": project.id,
                "title": project.title,
                "heads": list(project.ai_heads),
                "status": project.status,
                "reasons": reasons,
            }
        )
    return rows


def run_leaderboard(store: SqliteProjectStore, today: date, as_json: bool) -> int:
    stats = compute_stats(store.load(), today=today)
    if as_json:
        print(json.dumps([s.to_dict() for s in stats], ensure_ascii=False, indent=2))
    else:
        print(leaderboard_frame(stats).to_string(index=False))
    return len(stats)


def run_at_risk(store: SqliteProjectStore, today: date, as_json: bool) -> int:
    rows = _at_risk_rows(store.load(), today)
    if as_json:
        print(json.dumps(rows, ensure_ascii=False, indent=2))
    elif not rows:
        print("No projects at risk.")
    else:
        for row in rows:
            heads = ", ".join(row["heads"]) or "unassigned"
            print(f"- {row['title']} ({heads}) | {row['status']} | {'; '.join(row['reasons'])}")
    return len(rows)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Print the AI heads scoreboard.")
    parser.add_argument("mode", choices=["leaderboard", "at-risk"], help="Report type.")
    parser.add_argument("--today", help="Override today date (YYYY-MM-DD).")
    parser.add_argument("--json", action="store_true", help="Emit JSON instead of a table.")
    parser.add_argument("--seed", action="store_true", help="Write demo projects if the store is empty.")
    parser.add_argument("--db-path", help="SQLite file (defaults to AI_HEADS_DB_PATH).")
    return parser


def main(argv: list[str] | None = None) -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        today = _parse_today(args.today)
    except ValueError as exc:
        parser.error(str(exc))

    con = connect(args.db_path or default_db_path())
    init_db(con)
    store = SqliteProjectStore(con)
    if args.seed:
        ensure_seed_data(store)

    if args.mode == "leaderboard":
        count = run_leaderboard(store, today, args.json)
    else:
        count = run_at_risk(store, today, args.json)

    LOGGER.info("Summary: %s rows for %s", count, today.isoformat())


if __name__ == "__main__":
    main()
