from __future__ import annotations

from datetime import datetime, timezone
import json
import logging
import sqlite3
from typing import Any, Iterable, Protocol

from ai_heads.domain.constants import PROJECTS_KEY
from ai_heads.domain.models import Project, coerce_project

LOGGER = logging.getLogger(__name__)


class KeyValueStore:
    """JSON values keyed by name, kept in the ``kv_store`` table."""

    def __init__(self, con: sqlite3.Connection) -> None:
        self.con = con

    def get(self, key: str, fallback: Any = None) -> Any:
        try:
            row = self.con.execute(
                """
                SELECT value_json
                FROM kv_store
                WHERE key = ?
                """,
                (key,),
            ).fetchone()
        except sqlite3.Error as exc:
            LOGGER.warning("Could not read %s from kv_store: %s", key, exc)
            return fallback
        if row is None:
            return fallback
        try:
            value = json.loads(row["value_json"])
        except (TypeError, ValueError):
            LOGGER.warning("Stored value for %s is not valid JSON; using fallback", key)
            return fallback
        return fallback if value is None else value

    def set(self, key: str, value: Any) -> None:
        self.con.execute(
            """
            INSERT INTO kv_store (key, value_json, updated_at)
            VALUES (?, ?, ?)
            ON CONFLICT(key) DO UPDATE SET
              value_json = excluded.value_json,
              updated_at = excluded.updated_at
            """,
            (
                key,
                json.dumps(value, ensure_ascii=False),
                datetime.now(timezone.utc).isoformat(),
            ),
        )
        self.con.commit()

    def delete(self, key: str) -> None:
        self.con.execute("DELETE FROM kv_store WHERE key = ?", (key,))
        self.con.commit()

    def has(self, key: str) -> bool:
        return self.get(key) is not None


class ProjectStore(Protocol):
    def has_data(self) -> bool:
        ...

    def load(self) -> list[Project]:
        ...

    def save(self, projects: Iterable[Project]) -> None:
        ...


def _normalize(projects: Iterable[Any]) -> list[Project]:
    return [p for p in (coerce_project(raw) for raw in projects or []) if p is not None]


class _ProjectStoreMixin:
    def load(self) -> list[Project]:
        raise NotImplementedError

    def save(self, projects: Iterable[Project]) -> None:
        raise NotImplementedError

    def get_project(self, project_id: str) -> Project | None:
        for project in self.load():
            if project.id == project_id:
                return project
        return None

    def upsert_project(self, project: Project) -> None:
        projects = self.load()
        for index, existing in enumerate(projects):
            if existing.id == project.id:
                projects[index] = project
                break
        else:
            projects.append(project)
        self.save(projects)

    def delete_project(self, project_id: str) -> bool:
        projects = self.load()
        remaining = [p for p in projects if p.id != project_id]
        if len(remaining) == len(projects):
            return False
        self.save(remaining)
        return True


class SqliteProjectStore(_ProjectStoreMixin):
    def __init__(self, con: sqlite3.Connection, key: str = PROJECTS_KEY) -> None:
        self.kv = KeyValueStore(con)
        self.key = key

    def has_data(self) -> bool:
        return self.kv.has(self.key)

    def load(self) -> list[Project]:
        raw = self.kv.get(self.key, [])
        if not isinstance(raw, list):
            LOGGER.warning("Stored projects under %s are not a list; ignoring", self.key)
            return []
        return _normalize(raw)

    def save(self, projects: Iterable[Project]) -> None:
        self.kv.set(self.key, [p.to_dict() for p in _normalize(projects)])


class InMemoryProjectStore(_ProjectStoreMixin):
    def __init__(self, projects: Iterable[Any] | None = None) -> None:
        self._projects: list[Project] | None = (
            _normalize(projects) if projects is not None else None
        )

    def has_data(self) -> bool:
        return self._projects is not None

    def load(self) -> list[Project]:
        return list(self._projects or [])

    def save(self, projects: Iterable[Project]) -> None:
        self._projects = _normalize(projects)
