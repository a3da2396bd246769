"""
REST HTTP client for the Ready backend.

Every call is a single round trip: no retries. Transport failures and
non-success statuses raise NetworkError, unparseable bodies raise FormatError.
"""

from typing import Any, Optional

import httpx

from ready_admin.context import AuthContext
from ready_admin.errors import FormatError, NetworkError
from ready_admin.log import get_logger

DEFAULT_BASE_URL = "https://ready-back-end.onrender.com"

logger = get_logger(__name__)


class HttpClient:
    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        context: Optional[AuthContext] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 30.0,
    ):
        self._base_url = base_url.rstrip("/")
        self.context = context if context is not None else AuthContext()
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            headers={"User-Agent": "ready-admin/0.1.0", "Accept": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    def _auth_headers(self, authenticated: bool) -> dict[str, str]:
        headers: dict[str, str] = {"Content-Type": "application/json"}
        if authenticated and self.context.token:
            headers["Authorization"] = f"Bearer {self.context.token}"
        return headers

    @staticmethod
    def _error_message(resp: httpx.Response) -> Optional[str]:
        """Pull {"message": ...} out of an error body, if there is one."""
        try:
            body = resp.json()
        except ValueError:
            return None
        if isinstance(body, dict) and isinstance(body.get("message"), str):
            return body["message"]
        return None

    def _decode(self, resp: httpx.Response, allow_empty: bool = False) -> Any:
        if resp.status_code >= 400:
            server_message = self._error_message(resp)
            raise NetworkError(
                f"HTTP {resp.status_code}: {server_message or resp.text[:200]}",
                details={"status": resp.status_code, "message": server_message},
            )
        if allow_empty and not resp.content.strip():
            return None
        try:
            return resp.json()
        except ValueError as e:
            if allow_empty:
                return None
            raise FormatError(f"Response is not valid JSON: {e}")

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[dict[str, Any]] = None,
        body: Optional[dict[str, Any]] = None,
        authenticated: bool = True,
        allow_empty: bool = False,
    ) -> Any:
        try:
            resp = await self._client.request(
                method, path, params=params, json=body, headers=self._auth_headers(authenticated),
            )
        except httpx.HTTPError as e:
            logger.warning("request_failed", method=method, path=path, error=str(e))
            raise NetworkError(f"{method} {path} failed: {e}") from e
        logger.debug("response", method=method, path=path, status=resp.status_code)
        return self._decode(resp, allow_empty=allow_empty)

    async def get(self, path: str, params: Optional[dict[str, Any]] = None, authenticated: bool = True) -> Any:
        return await self._request("GET", path, params=params, authenticated=authenticated)

    async def post(self, path: str, body: Optional[dict[str, Any]] = None, authenticated: bool = True) -> Any:
        return await self._request("POST", path, body=body, authenticated=authenticated)

    async def patch(self, path: str, body: Optional[dict[str, Any]] = None, authenticated: bool = True) -> Any:
        """PATCH; success responses may carry no body."""
        return await self._request("PATCH", path, body=body, authenticated=authenticated, allow_empty=True)

    async def close(self) -> None:
        await self._client.aclose()
