from __future__ import annotations

from datetime import date
import sqlite3
from typing import Any, MutableMapping

import streamlit as st

from ai_heads.data.storage import SqliteProjectStore
from ai_heads.domain.constants import (
    AI_HEADS,
    PROJECT_STATUSES,
    STATUS_NOT_STARTED,
    VENDORS,
)
from ai_heads.services.dates import parse_date
from ai_heads.services.projects import (
    add_approval,
    approval_state_change,
    approval_state_options,
    build_project,
    new_approval,
    set_approval_state,
)

FLASH_KEY = "projects_flash"


def stash_flash(state: MutableMapping[str, Any], message: str) -> None:
    state[FLASH_KEY] = message


def take_flash(state: MutableMapping[str, Any]) -> str | None:
    """Pop the message stashed before the last rerun, if any."""
    return state.pop(FLASH_KEY, None)


def _date_input(label: str, value: str | None, key: str) -> date | None:
    parsed = parse_date(value)
    no_date = st.checkbox(f"No {label.lower()}", value=parsed is None, key=f"{key}_none")
    picked = st.date_input(label, value=parsed or date.today(), disabled=no_date, key=key)
    return None if no_date else picked


def render(con: sqlite3.Connection) -> None:
    st.header("Projects")
    flash = take_flash(st.session_state)
    if flash:
        st.success(flash)

    store = SqliteProjectStore(con)
    projects = store.load()
    by_id = {p.id: p for p in projects}

    st.subheader("Add / edit project")
    options = ["(new)"] + [p.id for p in projects]
    selected_id = st.selectbox(
        "Project to edit",
        options,
        format_func=lambda pid: "(new)" if pid == "(new)" else by_id[pid].title or pid,
    )
    editing = selected_id != "(new)"
    selected = by_id.get(selected_id) if editing else None

    with st.form("project_form"):
        title = st.text_input("Title", value=selected.title if selected else "")
        vendor = st.selectbox(
            "Vendor",
            VENDORS,
            index=VENDORS.index(selected.vendor) if selected and selected.vendor in VENDORS else 0,
        )
        heads = st.multiselect(
            "AI heads",
            options=list(AI_HEADS),
            default=[h for h in (selected.ai_heads if selected else ()) if h in AI_HEADS],
        )
        current_status = selected.status if selected else STATUS_NOT_STARTED
        status = st.selectbox(
            "Status",
            PROJECT_STATUSES,
            index=PROJECT_STATUSES.index(current_status) if current_status in PROJECT_STATUSES else 0,
        )
        progress = st.slider("Progress %", 0, 100, value=selected.progress if selected else 0)
        start_date = _date_input("Start date", selected.start_date if selected else None, "start_date")
        target_date = _date_input("Target date", selected.target_date if selected else None, "target_date")
        submitted = st.form_submit_button("Save")

    if submitted:
        payload = {
            "title": title,
            "vendor": vendor,
            "ai_heads": heads,
            "status": status,
            "progress": progress,
            "start_date": start_date,
            "target_date": target_date,
        }
        try:
            project = build_project(payload, existing=selected)
        except ValueError as exc:
            st.error(str(exc))
        else:
            store.upsert_project(project)
            stash_flash(st.session_state, "Project saved.")
            st.rerun()

    if not selected:
        return

    st.subheader("Approvals")
    for approval in selected.approvals:
        c1, c2 = st.columns([3, 1])
        c1.markdown(f"**{approval.title}** · {approval.owner or '—'} · due {approval.due_date or '—'}")
        state_options = approval_state_options(approval.state)
        chosen = c2.selectbox(
            "State",
            state_options,
            index=state_options.index(approval.state) if approval.state in state_options else 0,
            key=f"approval_state_{approval.id}",
            label_visibility="collapsed",
        )
        new_state = approval_state_change(approval, chosen)
        if new_state is not None:
            store.upsert_project(set_approval_state(selected, approval.id, new_state))
            st.rerun()

    with st.form("approval_form", clear_on_submit=True):
        approval_title = st.text_input("Approval title")
        owner = st.text_input("Owner")
        due_date = st.date_input("Due date", value=date.today())
        submitted_approval = st.form_submit_button("Add approval")

    if submitted_approval:
        try:
            approval = new_approval(approval_title, owner, due_date)
        except ValueError as exc:
            st.error(str(exc))
        else:
            store.upsert_project(add_approval(selected, approval))
            st.rerun()

    st.subheader("Delete project")
    confirm = st.checkbox("Confirm deleting this project", key="delete_confirm")
    if st.button("Delete", disabled=not confirm):
        store.delete_project(selected.id)
        stash_flash(st.session_state, "Project deleted.")
        st.rerun()
