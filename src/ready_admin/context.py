"""
Process-scoped auth context.

One instance is created per client and handed to the HTTP layer, which reads
the token for every outgoing request. Login sets it, logout clears it.
"""

from typing import Optional


class AuthContext:
    def __init__(self, token: Optional[str] = None):
        self._token = token or None

    @property
    def token(self) -> Optional[str]:
        return self._token

    @property
    def authenticated(self) -> bool:
        return self._token is not None

    def set_token(self, token: str) -> None:
        if not token:
            raise ValueError("token must be a non-empty string")
        self._token = token

    def clear(self) -> None:
        self._token = None

    def __repr__(self) -> str:
        return f"AuthContext(authenticated={self.authenticated})"
