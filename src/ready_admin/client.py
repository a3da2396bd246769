"""
AsyncReadyAdmin / ReadyAdmin — main SDK clients.
"""

import asyncio
from typing import Any, Optional

import httpx

from ready_admin.auth import Auth
from ready_admin.context import AuthContext
from ready_admin.models.session import SessionPage
from ready_admin.pagination import DEFAULT_PAGE_SIZE
from ready_admin.sessions import SessionsAPI
from ready_admin.transport.http import DEFAULT_BASE_URL, HttpClient
from ready_admin.view import DEFAULT_NOTICE_TTL_S, DirectoryView


class AsyncReadyAdmin:
    """Async Ready admin client (primary)."""

    def __init__(
        self,
        access_token: Optional[str] = None,
        base_url: str = DEFAULT_BASE_URL,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 30.0,
    ):
        self.context = AuthContext(access_token)
        self.http = HttpClient(base_url=base_url, context=self.context, transport=transport, timeout=timeout)
        self.auth = Auth(self.http)
        self.sessions = SessionsAPI(self.http)

    @property
    def authenticated(self) -> bool:
        return self.context.authenticated

    def directory(self, page_size: int = DEFAULT_PAGE_SIZE, notice_ttl: float = DEFAULT_NOTICE_TTL_S) -> DirectoryView:
        """A fresh, not yet loaded, sessions directory view."""
        return DirectoryView(self.sessions, page_size=page_size, notice_ttl=notice_ttl)

    async def close(self) -> None:
        await self.http.close()

    async def __aenter__(self) -> "AsyncReadyAdmin":
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()


class ReadyAdmin:
    """Sync wrapper around AsyncReadyAdmin. Runs the event loop internally."""

    def __init__(self, **kwargs: Any):
        self._async = AsyncReadyAdmin(**kwargs)
        self._loop = asyncio.new_event_loop()

    def _run(self, coro: Any) -> Any:
        return self._loop.run_until_complete(coro)

    @property
    def authenticated(self) -> bool:
        return self._async.authenticated

    def login(self, email: str, password: str) -> dict[str, Any]:
        return self._run(self._async.auth.login(email, password))

    def logout(self) -> None:
        self._async.auth.logout()

    def fetch_page(self, page: int, page_size: int = DEFAULT_PAGE_SIZE) -> SessionPage:
        return self._run(self._async.sessions.fetch_page(page, page_size))

    def update_meeting_link(self, session_id: str, link: str) -> None:
        self._run(self._async.sessions.update_meeting_link(session_id, link))

    def close(self) -> None:
        self._run(self._async.close())
        self._loop.close()
