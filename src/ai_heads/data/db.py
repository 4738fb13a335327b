from __future__ import annotations

import os
from pathlib import Path
import sqlite3

SCHEMA_VERSION = 1

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS kv_store (
  key TEXT PRIMARY KEY,
  value_json TEXT NOT NULL,
  updated_at TEXT NOT NULL
);
"""


def default_db_path() -> Path:
    data_dir = Path(os.getenv("AI_HEADS_DATA_DIR", "./data"))
    return Path(os.getenv("AI_HEADS_DB_PATH", data_dir / "app.db"))


def connect(db_path: Path | str) -> sqlite3.Connection:
    if str(db_path) == ":memory:":
        con = sqlite3.connect(":memory:")
    else:
        path = Path(db_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        con = sqlite3.connect(path.as_posix())
    con.row_factory = sqlite3.Row
    return con


def _get_user_version(con: sqlite3.Connection) -> int:
    row = con.execute("PRAGMA user_version;").fetchone()
    return int(row[0]) if row else 0


def _set_user_version(con: sqlite3.Connection, version: int) -> None:
    con.execute(f"PRAGMA user_version = {version};")


def init_db(con: sqlite3.Connection) -> None:
    con.executescript(SCHEMA_SQL)
    if _get_user_version(con) < SCHEMA_VERSION:
        _set_user_version(con, SCHEMA_VERSION)
    con.commit()
