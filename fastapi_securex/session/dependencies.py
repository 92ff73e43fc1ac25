from fastapi import Request

from fastapi_securex.exceptions import ConfigurationError

from .middleware import STATE_KEY
from .store import SessionStore


async def get_session(request: Request) -> SessionStore:
    """FastAPI dependency to get the started session.

    Raises:
        ConfigurationError: If SessionMiddleware is not installed
    """
    store: SessionStore | None = getattr(request.state, STATE_KEY, None)
    if store is None:
        msg = "SessionMiddleware must be installed to use sessions"
        raise ConfigurationError(msg)

    await store.start()
    return store


async def get_optional_session(request: Request) -> SessionStore | None:
    """FastAPI dependency to get the started session, or None without middleware."""
    store: SessionStore | None = getattr(request.state, STATE_KEY, None)
    if store is None:
        return None

    await store.start()
    return store
