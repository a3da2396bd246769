"""
Directory view: the stateful core behind every sessions screen.

Two lifecycles share one record set:
- page lifecycle: LOADING -> READY | ERROR, re-entered on every load
- modal lifecycle: closed -> open(target, draft) -> submitting -> closed

The view is the only writer of `records`. Writers are serialized by the event
loop: a page load replaces the tuple, a successful link update swaps one
element. Readers get the tuple itself, which never changes under them.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Callable, Optional, Union

from ready_admin.errors import FormatError, ReadyAdminError
from ready_admin.filtering import filter_sessions
from ready_admin.log import get_logger
from ready_admin.models.session import SessionRecord
from ready_admin.pagination import DEFAULT_PAGE_SIZE, Paginator
from ready_admin.sessions import SessionsAPI, ingest_records

logger = get_logger(__name__)

DEFAULT_NOTICE_TTL_S = 5.0
FETCH_FAILED_MESSAGE = "Failed to fetch sessions"
UPDATE_FAILED_NOTICE = "Failed to update meeting link. Please try again."


class PageState(str, Enum):
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


@dataclass(frozen=True)
class ModalClosed:
    pass


@dataclass(frozen=True)
class ModalOpen:
    target_id: str
    draft: str = ""
    submitting: bool = False

    @property
    def can_submit(self) -> bool:
        return bool(self.target_id) and not self.submitting


Modal = Union[ModalClosed, ModalOpen]
MODAL_CLOSED = ModalClosed()


@dataclass(frozen=True)
class Notice:
    text: str
    level: str = "error"


class DirectoryView:
    def __init__(
        self,
        sessions: SessionsAPI,
        page_size: int = DEFAULT_PAGE_SIZE,
        notice_ttl: float = DEFAULT_NOTICE_TTL_S,
    ):
        self._sessions = sessions
        self._notice_ttl = notice_ttl
        self.paginator = Paginator(page_size=page_size)

        self.page_state = PageState.LOADING
        self.error: Optional[str] = None
        self.records: tuple[SessionRecord, ...] = ()
        self.search = ""
        self.visible: tuple[SessionRecord, ...] = ()
        self.modal: Modal = MODAL_CLOSED
        self.notice: Optional[Notice] = None

        self._generation = 0
        self._submission = 0
        self._closed = False
        self._notice_timer: Optional[asyncio.TimerHandle] = None
        self._listeners: list[Callable[[DirectoryView], None]] = []

    async def __aenter__(self) -> DirectoryView:
        await self.load()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        self.close()

    @property
    def loading(self) -> bool:
        return self.page_state is PageState.LOADING

    @property
    def closed(self) -> bool:
        return self._closed

    def subscribe(self, listener: Callable[[DirectoryView], None]) -> Callable[[], None]:
        """Call listener after every state change. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def remove() -> None:
            try:
                self._listeners.remove(listener)
            except ValueError:
                pass
        return remove

    def _changed(self) -> None:
        self.visible = tuple(filter_sessions(self.records, self.search))
        for listener in list(self._listeners):
            listener(self)

    # -- page lifecycle -------------------------------------------------

    def _superseded(self, generation: int) -> bool:
        return self._closed or generation != self._generation

    async def load(self) -> None:
        """Fetch the paginator's current page and replace the record set."""
        if self._closed:
            raise RuntimeError("view is closed")
        self._generation += 1
        generation = self._generation
        page = self.paginator.page
        page_size = self.paginator.page_size

        self.page_state = PageState.LOADING
        self.error = None
        self._changed()

        try:
            result = await self._sessions.fetch_page(page, page_size)
        except ReadyAdminError as e:
            if self._superseded(generation):
                logger.debug("stale_page_discarded", page=page)
                return
            logger.warning("page_load_failed", page=page, code=e.code, error=str(e))
            self.records = ()
            self.error = str(e) if isinstance(e, FormatError) else FETCH_FAILED_MESSAGE
            self.page_state = PageState.ERROR
            self._changed()
            return

        if self._superseded(generation):
            logger.debug("stale_page_discarded", page=page)
            return

        records = ingest_records(result.records)
        self.records = tuple(records)
        self.paginator.total = result.total if result.total is not None else len(records)
        self.page_state = PageState.READY
        logger.info("page_loaded", page=page, received=len(result.records),
                    kept=len(records), total=self.paginator.total)
        self._changed()

    async def go_to(self, page: int) -> None:
        """Move to another page and fetch it. A newer call supersedes an older one."""
        self.paginator.go_to(page)
        await self.load()

    def set_search(self, term: str) -> None:
        self.search = term
        self._changed()

    # -- modal lifecycle ------------------------------------------------

    def find(self, session_id: str) -> SessionRecord:
        for record in self.records:
            if record.id == session_id:
                return record
        raise KeyError(session_id)

    def open_editor(self, session_id: str) -> None:
        if isinstance(self.modal, ModalOpen) and self.modal.submitting:
            raise RuntimeError("a meeting link update is still pending")
        record = self.find(session_id)
        self.modal = ModalOpen(target_id=record.id, draft=record.meeting_link or "")
        self._changed()

    def set_draft(self, text: str) -> None:
        if not isinstance(self.modal, ModalOpen):
            raise RuntimeError("editor is not open")
        self.modal = replace(self.modal, draft=text)
        self._changed()

    def cancel_editor(self) -> None:
        self.modal = MODAL_CLOSED
        self._changed()

    def _submission_current(self, submission: int) -> bool:
        modal = self.modal
        return isinstance(modal, ModalOpen) and modal.submitting and submission == self._submission

    async def submit_link(self) -> bool:
        """Send the draft link for the open target.

        Returns True once the server accepted the link. Returns False without
        any request when the editor is closed or a submission is already
        pending, and False after a failed request (the editor stays open).
        """
        modal = self.modal
        if self._closed or not isinstance(modal, ModalOpen) or not modal.can_submit:
            return False

        target_id, link = modal.target_id, modal.draft
        self._submission += 1
        submission = self._submission
        self.modal = replace(modal, submitting=True)
        self._changed()

        try:
            await self._sessions.update_meeting_link(target_id, link)
        except ReadyAdminError as e:
            logger.warning("meeting_link_update_failed", session_id=target_id, code=e.code, error=str(e))
            if self._closed:
                return False
            if self._submission_current(submission):
                self.modal = replace(self.modal, submitting=False)
            self._post_notice(UPDATE_FAILED_NOTICE)
            self._changed()
            return False

        if self._closed:
            return True
        self.records = tuple(
            r.with_meeting_link(link) if r.id == target_id else r for r in self.records
        )
        if self._submission_current(submission):
            self.modal = MODAL_CLOSED
        self._changed()
        return True

    # -- notices --------------------------------------------------------

    def _post_notice(self, text: str, level: str = "error") -> None:
        if self._notice_timer is not None:
            self._notice_timer.cancel()
            self._notice_timer = None
        self.notice = Notice(text=text, level=level)
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return
        self._notice_timer = loop.call_later(self._notice_ttl, self.dismiss_notice)

    def dismiss_notice(self) -> None:
        if self._notice_timer is not None:
            self._notice_timer.cancel()
            self._notice_timer = None
        if self.notice is None:
            return
        self.notice = None
        if not self._closed:
            self._changed()

    # -- teardown -------------------------------------------------------

    def close(self) -> None:
        """Tear the view down; responses still in flight are discarded."""
        if self._closed:
            return
        self._closed = True
        if self._notice_timer is not None:
            self._notice_timer.cancel()
            self._notice_timer = None
        self.notice = None
        self.records = ()
        self.visible = ()
        self.modal = MODAL_CLOSED
        self._listeners.clear()
