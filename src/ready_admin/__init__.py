"""
ready-admin — admin SDK and terminal console for Ready sessions.

Lists the sessions collection page by page, searches the loaded page and
sets meeting links, over the Ready REST backend.
"""

from ready_admin.client import ReadyAdmin, AsyncReadyAdmin
from ready_admin.auth import Auth
from ready_admin.context import AuthContext
from ready_admin.sessions import SessionsAPI, ingest_records
from ready_admin.filtering import filter_sessions
from ready_admin.pagination import Paginator
from ready_admin.view import DirectoryView, PageState, ModalOpen, ModalClosed, Notice
from ready_admin.models.session import SessionRecord, SessionStatus, SessionPage
from ready_admin.errors import ReadyAdminError, NetworkError, FormatError, AuthError

__version__ = "0.1.0"
__all__ = [
    "ReadyAdmin",
    "AsyncReadyAdmin",
    "Auth",
    "AuthContext",
    "SessionsAPI",
    "ingest_records",
    "filter_sessions",
    "Paginator",
    "DirectoryView",
    "PageState",
    "ModalOpen",
    "ModalClosed",
    "Notice",
    "SessionRecord",
    "SessionStatus",
    "SessionPage",
    "ReadyAdminError",
    "NetworkError",
    "FormatError",
    "AuthError",
]
