"""Security headers middleware."""

from collections.abc import Awaitable
from collections.abc import Callable
from collections.abc import Mapping
from logging import getLogger
from typing import Any

from fastapi import Request
from fastapi import Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from .profiles import SecurityHeaders

logger = getLogger(__name__)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Writes a fixed set of security headers on every response.

    Args:
        app: ASGI application
        policy: Prebuilt header policy
        profile: Name of a built-in profile, used when no policy is given
        headers: Overrides merged onto the profile (or the default policy);
            ``False``/``None`` remove a header

    Usage:
        app.add_middleware(SecurityHeadersMiddleware, profile="strict")
        app.add_middleware(
            SecurityHeadersMiddleware,
            policy=SecurityHeaders.recommended({"X-Frame-Options": "SAMEORIGIN"}),
        )
    """

    def __init__(
        self,
        app: ASGIApp,
        policy: SecurityHeaders | None = None,
        profile: str | None = None,
        headers: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(app)
        if policy is None:
            if profile is not None:
                policy = SecurityHeaders.from_profile(profile, headers)
            else:
                policy = SecurityHeaders.default(headers)
        elif headers:
            policy = SecurityHeaders(policy.headers, headers)

        self.policy = policy
        self._resolved = policy.resolved()
        logger.debug("Security headers configured: %s", sorted(self._resolved))

    @property
    def headers(self) -> dict[str, str]:
        return dict(self._resolved)

    def apply(self, response: Response) -> Response:
        for name, value in self._resolved.items():
            response.headers[name] = value
        return response

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        response = await call_next(request)
        return self.apply(response)
