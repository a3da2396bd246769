"""
Sessions REST API — paginated listing and the meeting-link patch.

Record-level validation is left to the caller (see ingest_records); this
module only checks the envelope shape.
"""

from __future__ import annotations

from typing import Any, Iterable
from urllib.parse import quote

from pydantic import ValidationError

from ready_admin.errors import FormatError
from ready_admin.log import get_logger
from ready_admin.models.session import SessionPage, SessionRecord
from ready_admin.transport.http import HttpClient

logger = get_logger(__name__)


class SessionsAPI:
    def __init__(self, http: HttpClient):
        self._http = http

    async def fetch_page(self, page: int, page_size: int) -> SessionPage:
        """Fetch one page (1-based) of sessions."""
        skip = (page - 1) * page_size
        data = await self._http.get(
            "/sessions/platform/all", params={"limit": page_size, "skip": skip},
        )
        if not isinstance(data, dict) or not isinstance(data.get("sessions"), list):
            raise FormatError("Invalid response format", details={"page": page})

        total = data.get("total")
        # bool is an int subclass; the server never means True as a count
        if not isinstance(total, int) or isinstance(total, bool):
            total = None
        logger.debug("page_fetched", page=page, limit=page_size, skip=skip,
                     received=len(data["sessions"]), total=total)
        return SessionPage(records=data["sessions"], total=total)

    async def update_meeting_link(self, session_id: str, link: str) -> None:
        """Set the meeting link of one session. Nothing else is sent."""
        await self._http.patch(f"/sessions/{quote(session_id, safe='')}/add-link", {"meetingLink": link})
        logger.info("meeting_link_updated", session_id=session_id)


def ingest_records(candidates: Iterable[Any]) -> list[SessionRecord]:
    """Validate raw candidates, silently dropping the malformed ones."""
    records: list[SessionRecord] = []
    for raw in candidates:
        if not isinstance(raw, dict) or not raw.get("_id") or not raw.get("status"):
            logger.debug("record_dropped", reason="missing id or status",
                         record_id=raw.get("_id") if isinstance(raw, dict) else None)
            continue
        try:
            records.append(SessionRecord.model_validate(raw))
        except ValidationError as e:
            logger.debug("record_dropped", reason="invalid", record_id=raw.get("_id"),
                         errors=e.error_count())
    return records
