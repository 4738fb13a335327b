from __future__ import annotations

import logging
import time

from ai_heads.data.storage import ProjectStore
from ai_heads.domain.models import Project

LOGGER = logging.getLogger(__name__)


def seed_projects(now_ms: int | None = None) -> list[Project]:
    updated_at = now_ms if now_ms is not None else int(time.time() * 1000)
    return [
        Project.from_dict(
            {
                "id": "p1",
                "title": "Instant Report UX polish",
                "vendor": "Agilisium",
                "aiHeads": ["Badri", "Avisek"],
                "status": "In Progress",
                "progress": 60,
                "approvals": [
                    {
                        "id": "a1",
                        "title": "UI signoff",
                        "owner": "Rajan",
                        "dueDate": "2026-02-01",
                        "state": "Pending",
                    }
                ],
                "updatedAt": updated_at,
            }
        ),
        Project.from_dict(
            {
                "id": "p2",
                "title": "Prompt library cleanup",
                "vendor": "Darsa",
                "aiHeads": ["Shourya"],
                "status": "Done",
                "progress": 100,
                "approvals": [],
                "updatedAt": updated_at,
            }
        ),
    ]


def ensure_seed_data(store: ProjectStore) -> bool:
    """Write the demo projects when the store holds nothing yet."""
    if store.has_data():
        return False
    projects = seed_projects()
    store.save(projects)
    LOGGER.info("Seeded %d demo projects", len(projects))
    return True
