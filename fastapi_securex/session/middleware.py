"""Session middleware for FastAPI."""

from collections.abc import Awaitable
from collections.abc import Callable
from logging import getLogger

from fastapi import Request
from fastapi import Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from fastapi_securex.backends import BaseSessionBackend
from fastapi_securex.backends import MemoryBackend

from .config import SessionConfig
from .store import SessionStore

logger = getLogger(__name__)

STATE_KEY = "__fastapi_securex_session"


class SessionMiddleware(BaseHTTPMiddleware):
    """Attaches a SessionStore to each request and persists it afterwards.

    Sessions start lazily (through ``get_session`` or an explicit
    ``start()``) unless ``auto_start`` is set.

    Args:
        app: ASGI application
        backend: Session storage (defaults to an in-memory backend)
        config: Session settings
        auto_start: Start the session before calling the application
    """

    def __init__(
        self,
        app: ASGIApp,
        backend: BaseSessionBackend | None = None,
        config: SessionConfig | None = None,
        auto_start: bool = False,
    ) -> None:
        super().__init__(app)
        if backend is None:
            backend = MemoryBackend()
            logger.info("No session backend given, using <%s>", backend.__class__.__name__)
        self.backend = backend
        self.config = config or SessionConfig()
        self.auto_start = auto_start

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        store = SessionStore.from_request(request, self.backend, self.config)
        setattr(request.state, STATE_KEY, store)

        if self.auto_start:
            await store.start()

        response = await call_next(request)

        await store.save()
        store.cookies.apply(response)
        return response
