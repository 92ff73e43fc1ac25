"""Fingerprinted server-side sessions."""

from .config import SessionConfig
from .dependencies import get_optional_session
from .dependencies import get_session
from .middleware import SessionMiddleware
from .store import FlashLevel
from .store import SessionStore

__all__ = [
    "FlashLevel",
    "SessionConfig",
    "SessionMiddleware",
    "SessionStore",
    "get_optional_session",
    "get_session",
]
