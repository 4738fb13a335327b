from __future__ import annotations

from datetime import date
import sqlite3

import altair as alt
import pandas as pd
import streamlit as st

from ai_heads.app.components import chip_html, status_badge_html
from ai_heads.data.storage import SqliteProjectStore
from ai_heads.domain.constants import AI_HEADS, PROJECT_STATUSES, STATUS_COLORS, VENDORS
from ai_heads.domain.models import HeadStats, Project
from ai_heads.services.dates import format_short
from ai_heads.services.filters import ALL_OPTION, compute_kpis, filter_projects
from ai_heads.services.risk import is_at_risk, overdue_pending_approvals, pending_approvals
from ai_heads.services.scoring import compute_stats, leaderboard_frame, rank_badge
from ai_heads.services.timeline import build_timeline_frame, timeline_bounds


def _render_leaderboard(stats: list[HeadStats]) -> None:
    st.subheader("Leaderboard")
    columns = st.columns(max(1, len(stats)))
    for index, (col, head_stats) in enumerate(zip(columns, stats)):
        with col:
            st.metric(head_stats.head, head_stats.score)
            st.caption(
                f"Done: {head_stats.done} | In progress: {head_stats.in_progress}"
                f" | Blocked: {head_stats.blocked}"
            )
            st.caption(
                f"Pending approvals: {head_stats.pending_approvals}"
                f" | Overdue: {head_stats.overdue_approvals}"
            )
            st.markdown(rank_badge(index))

    board_df = leaderboard_frame(stats)
    chart = (
        alt.Chart(board_df)
        .mark_bar()
        .encode(
            x=alt.X("Score:Q", title="Score"),
            y=alt.Y("Head:N", sort=list(board_df["Head"]), title=None),
            color=alt.condition(alt.datum.Score < 0, alt.value("#E45756"), alt.value("#4C78A8")),
            tooltip=[
                alt.Tooltip("Head:N"),
                alt.Tooltip("Score:Q"),
                alt.Tooltip("Done:Q"),
                alt.Tooltip("Blocked:Q"),
                alt.Tooltip("Pending approvals:Q"),
                alt.Tooltip("Overdue approvals:Q"),
            ],
        )
        .properties(height=40 * max(1, len(board_df)) + 40)
    )
    st.altair_chart(chart, use_container_width=True)


def _render_kpis(projects: list[Project], today: date) -> None:
    kpis = compute_kpis(projects, today)
    k1, k2, k3, k4, k5, k6 = st.columns(6)
    k1.metric("Projects", kpis["total"])
    k2.metric("Done", kpis["done"])
    k3.metric("In progress", kpis["in_progress"])
    k4.metric("Blocked", kpis["blocked"])
    k5.metric("At risk", kpis["at_risk"])
    k6.metric(
        "Pending approvals",
        kpis["pending_approvals"],
        delta=f"{kpis['overdue_approvals']} overdue",
        delta_color="inverse",
    )


def _render_filters() -> dict[str, str | None]:
    c1, c2, c3, c4 = st.columns([1, 1, 1, 1.6])
    head = c1.selectbox("Head", [ALL_OPTION, *AI_HEADS], index=0)
    vendor = c2.selectbox("Vendor", [ALL_OPTION, *VENDORS], index=0)
    status = c3.selectbox("Status", [ALL_OPTION, *PROJECT_STATUSES], index=0)
    query = c4.text_input("Search", placeholder="Title, vendor, head, approval...")
    return {"head": head, "vendor": vendor, "status": status, "query": query}


def _render_project_table(projects: list[Project], today: date) -> None:
    if not projects:
        st.info("No projects match the selected filters.")
        return
    rows = [
        {
            "Title": p.title,
            "Vendor": p.vendor,
            "Heads": ", ".join(p.ai_heads) or "—",
            "Status": p.status,
            "Progress": p.progress,
            "Start": format_short(p.start_date),
            "Target": format_short(p.target_date),
            "Pending approvals": len(pending_approvals(p)),
            "Overdue approvals": len(overdue_pending_approvals(p, today)),
            "At risk": "⚠️" if is_at_risk(p, today) else "",
        }
        for p in projects
    ]
    st.dataframe(
        pd.DataFrame(rows),
        use_container_width=True,
        column_config={
            "Progress": st.column_config.ProgressColumn("Progress", min_value=0, max_value=100, format="%d%%"),
        },
        hide_index=True,
    )

    with st.expander("Project details", expanded=False):
        for p in projects:
            heads = "".join(chip_html(h) for h in p.ai_heads)
            st.markdown(
                f"**{p.title}** {status_badge_html(p.status)} {chip_html(p.vendor)} {heads}",
                unsafe_allow_html=True,
            )
            if not p.approvals:
                st.caption("No approvals.")
            for a in p.approvals:
                overdue = a in overdue_pending_approvals(p, today)
                flag = " · overdue" if overdue else ""
                st.caption(f"{a.title} ({a.owner or '—'}) · due {a.due_date or '—'} · {a.state}{flag}")


def _render_gantt(projects: list[Project], today: date) -> None:
    st.subheader("Gantt Timeline")
    df = build_timeline_frame(projects, today)
    bounds = timeline_bounds(df)
    if bounds is None:
        st.caption("Add start/target dates to projects to see the Gantt timeline.")
        return

    domain = [bounds[0].isoformat(), bounds[1].isoformat()]
    order = list(df["title"])
    base = alt.Chart(df).encode(
        y=alt.Y("title:N", sort=order, title=None),
    )
    bars = base.mark_bar(cornerRadius=4, opacity=0.85).encode(
        x=alt.X("start:T", scale=alt.Scale(domain=domain), title=None),
        x2="end:T",
        color=alt.Color(
            "status:N",
            scale=alt.Scale(domain=list(STATUS_COLORS), range=list(STATUS_COLORS.values())),
            legend=alt.Legend(title=None),
        ),
        tooltip=[
            alt.Tooltip("title:N", title="Project"),
            alt.Tooltip("vendor:N", title="Vendor"),
            alt.Tooltip("heads:N", title="Heads"),
            alt.Tooltip("start:T", title="Start"),
            alt.Tooltip("end:T", title="Target"),
            alt.Tooltip("progress:Q", title="Progress %"),
            alt.Tooltip("overdue:N", title="Overdue"),
        ],
    )
    progress = base.mark_bar(color="#FFFFFF", opacity=0.35, size=6).encode(
        x="start:T",
        x2="progress_end:T",
    )
    today_rule = (
        alt.Chart(pd.DataFrame({"today": [pd.Timestamp(today)]}))
        .mark_rule(color="#94A3B8", strokeWidth=2)
        .encode(x="today:T")
    )
    chart = alt.layer(bars, progress, today_rule).properties(height=36 * len(df) + 40)
    st.altair_chart(chart, use_container_width=True)


def render(con: sqlite3.Connection, today: date | None = None) -> None:
    st.title("AI Heads Command Centre")
    today = today or date.today()

    store = SqliteProjectStore(con)
    projects = store.load()

    _render_leaderboard(compute_stats(projects, today=today))

    st.subheader("KPI")
    _render_kpis(projects, today)

    st.subheader("Projects")
    filters = _render_filters()
    visible = filter_projects(projects, **filters)
    st.caption(f"Showing {len(visible)} of {len(projects)} projects.")
    _render_project_table(visible, today)
    _render_gantt(visible, today)
