"""
Admin login — POST /admin/auth with email and password.
"""

from typing import Any

from ready_admin.errors import AuthError, ReadyAdminError
from ready_admin.log import get_logger
from ready_admin.transport.http import HttpClient

logger = get_logger(__name__)


class Auth:
    def __init__(self, http: HttpClient):
        self._http = http

    async def login(self, email: str, password: str) -> dict[str, Any]:
        """Exchange credentials for an access token and store it in the context."""
        try:
            result = await self._http.post(
                "/admin/auth", {"email": email, "password": password}, authenticated=False,
            )
        except ReadyAdminError as e:
            logger.info("login_failed", email=email, code=e.code)
            server_message = (e.details or {}).get("message")
            raise AuthError(server_message or f"Login failed: {e}", details=e.details) from e

        token = result.get("accessToken") if isinstance(result, dict) else None
        if not isinstance(token, str) or not token:
            logger.info("login_failed", email=email, code="missing_token")
            raise AuthError("Login failed: response did not include an access token")

        self._http.context.set_token(token)
        logger.info("login_succeeded", email=email)
        return result

    def logout(self) -> None:
        self._http.context.clear()
