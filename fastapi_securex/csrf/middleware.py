"""CSRF middleware."""

from collections.abc import Awaitable
from collections.abc import Callable
from collections.abc import Sequence
from logging import getLogger
from typing import Any

from fastapi import Request
from fastapi import Response
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException
from starlette.formparsers import MultiPartException
from starlette.middleware import Middleware
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from fastapi_securex.environment import client_ip
from fastapi_securex.environment import is_json_body
from fastapi_securex.environment import user_agent
from fastapi_securex.exceptions import CsrfMismatchError
from fastapi_securex.types import PROTECTED_METHODS

from .config import CsrfConfig
from .patterns import ExclusionMatcher
from .protection import CsrfProtection
from .protection import csrf_protection

logger = getLogger(__name__)

STATE_KEY = "__fastapi_securex_csrf"

API_EXCLUSIONS = ("/api/*",)
WEBHOOK_EXCLUSIONS = ("/webhook/*", "/webhooks/*")


class CsrfMiddleware(BaseHTTPMiddleware):
    """Rejects state-changing requests that do not echo the CSRF cookie.

    Args:
        app: ASGI application
        exclude: Path patterns that skip CSRF handling entirely
        config: CSRF cookie and field settings
        failure_status_code: Status of the response sent on mismatch
        issue_on_safe_methods: Issue a token on safe requests when none exists
    """

    def __init__(
        self,
        app: ASGIApp,
        exclude: Sequence[str] = (),
        config: CsrfConfig | None = None,
        failure_status_code: int = 403,
        issue_on_safe_methods: bool = True,
    ) -> None:
        super().__init__(app)
        self.exclude = list(exclude)
        self.matcher = ExclusionMatcher(self.exclude)
        self.config = config or CsrfConfig()
        self.failure_status_code = failure_status_code
        self.issue_on_safe_methods = issue_on_safe_methods

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        csrf = csrf_protection(request, self.config)
        setattr(request.state, STATE_KEY, csrf)

        try:
            await self.verify(request, csrf)
        except CsrfMismatchError as exc:
            response = self._mismatch_response(exc)
            csrf.cookies.apply(response)
            return response

        response = await call_next(request)
        csrf.cookies.apply(response)
        return response

    def should_skip(self, path: str) -> bool:
        if pattern := self.matcher.match(path):
            logger.debug("CSRF skipped for %s (excluded by %s)", path, pattern)
            return True
        return False

    async def verify(self, request: Request, csrf: CsrfProtection | None = None) -> None:
        """Validate the request and rotate the token on success.

        Raises:
            CsrfMismatchError: If a protected request carries no valid token
        """
        if csrf is None:
            csrf = csrf_protection(request, self.config)

        if self.should_skip(request.url.path):
            return

        if request.method not in PROTECTED_METHODS:
            if self.issue_on_safe_methods:
                csrf.current()
            return

        body = await self._body(request)
        if not csrf.validate(body, request.headers):
            context = {
                "ip": client_ip(request),
                "user_agent": user_agent(request),
                "path": request.url.path,
                "method": request.method,
            }
            logger.warning(
                "CSRF token mismatch: %s %s from %s",
                context["method"],
                context["path"],
                context["ip"],
                extra={"csrf": context},
            )
            raise CsrfMismatchError(
                "Invalid CSRF token",
                context=context,
                status_code=self.failure_status_code,
            )

        csrf.rotate()

    async def _body(self, request: Request) -> Any:
        # Cache the raw body so the downstream app can still read it
        await request.body()

        if is_json_body(request):
            try:
                decoded = await request.json()
            except ValueError:
                return None
            return decoded if isinstance(decoded, dict) else None

        try:
            return await request.form()
        except (HTTPException, MultiPartException):
            return None

    def _mismatch_response(self, exc: CsrfMismatchError) -> Response:
        return JSONResponse(
            {"detail": "CSRF token mismatch"},
            status_code=exc.status_code,
        )


def excluding_api(**kwargs: Any) -> Middleware:
    """CSRF middleware that leaves ``/api/*`` to token-based auth."""
    return Middleware(CsrfMiddleware, exclude=list(API_EXCLUSIONS), **kwargs)


def excluding_webhooks(paths: Sequence[str] = (), **kwargs: Any) -> Middleware:
    """CSRF middleware that skips webhook receivers plus any extra ``paths``."""
    return Middleware(
        CsrfMiddleware, exclude=[*WEBHOOK_EXCLUSIONS, *paths], **kwargs
    )
