from __future__ import annotations

from html import escape

from ai_heads.domain.constants import STATUS_COLORS


def status_badge_html(status: str) -> str:
    color = STATUS_COLORS.get(status, "#64748B")
    return (
        f'<span style="display:inline-block;padding:0.1rem 0.5rem;border-radius:999px;'
        f'border:1px solid {color};color:{color};font-size:0.75rem;">'
        f"{escape(status or '—')}</span>"
    )


def chip_html(label: str) -> str:
    return (
        '<span style="display:inline-block;padding:0.1rem 0.5rem;margin-right:0.25rem;'
        'border-radius:999px;border:1px solid #E2E8F0;background:#F8FAFC;color:#334155;'
        f'font-size:0.75rem;">{escape(label)}</span>'
    )
