"""
Client-side search over the currently loaded page.

Pagination is server-side, so this never sees records from other pages. That
is the intended contract: a term that only matches on page 3 finds nothing
while page 1 is loaded.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, Optional

from ready_admin.models.session import SessionRecord


def format_session_date(value: Optional[datetime]) -> str:
    """Calendar date as M/D/YYYY in UTC, e.g. 3/7/2025."""
    if value is None:
        return ""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return f"{value.month}/{value.day}/{value.year}"


def matches(record: SessionRecord, term: str) -> bool:
    if record.user is None or record.listener is None:
        return False
    needle = term.lower()
    return (
        needle in record.user.name.lower()
        or needle in record.listener.name.lower()
        or needle in format_session_date(record.time).lower()
    )


def filter_sessions(records: Iterable[SessionRecord], term: str) -> list[SessionRecord]:
    """Records whose user name, listener name or date contains term, in order."""
    return [r for r in records if matches(r, term)]
