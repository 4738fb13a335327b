from __future__ import annotations

from typing import Any

from ai_heads.data.storage import KeyValueStore
from ai_heads.domain.constants import USER_KEY


def set_user(kv: KeyValueStore, name: str | None) -> bool:
    clean_name = (name or "").strip()
    if not clean_name:
        return False
    kv.set(USER_KEY, {"name": clean_name})
    return True


def get_user(kv: KeyValueStore) -> dict[str, Any] | None:
    user = kv.get(USER_KEY)
    if not isinstance(user, dict) or not str(user.get("name") or "").strip():
        return None
    return user


def clear_user(kv: KeyValueStore) -> None:
    kv.delete(USER_KEY)
