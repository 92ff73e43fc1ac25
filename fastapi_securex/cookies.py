"""Request-scoped cookie jar with secure defaults."""

from collections.abc import Mapping
from dataclasses import replace
from datetime import datetime
from datetime import timedelta
from datetime import timezone
from typing import Any

from fastapi import Request
from fastapi import Response

from .environment import is_secure
from .types import CookieOptions
from .types import PendingCookie

_STATE_KEY = "__fastapi_securex_cookies"


class CookieJar:
    """Reads incoming cookies and queues outgoing ones.

    Writes are visible to later reads within the same request, so a token
    issued by one component is seen by the next. Queued cookies reach the
    client once ``apply`` is called with the outgoing response.
    """

    def __init__(self, cookies: Mapping[str, str], secure: bool = False) -> None:
        self._cookies: dict[str, str] = dict(cookies)
        self._pending: dict[str, PendingCookie] = {}
        self.secure = secure

    def get(self, name: str, default: Any = None) -> Any:
        return self._cookies.get(name, default)

    def has(self, name: str) -> bool:
        return name in self._cookies

    def _options(self, overrides: dict[str, Any]) -> CookieOptions:
        return replace(CookieOptions(secure=self.secure), **overrides)

    def set(
        self,
        name: str,
        value: str,
        max_age: int | None = None,
        expires: datetime | None = None,
        **options: Any,
    ) -> None:
        """Queue a cookie.

        Args:
            name: Cookie name
            value: Cookie value
            max_age: Max-Age in seconds (None = session cookie)
            expires: Absolute expiry
            **options: Overrides for path, domain, secure, httponly and samesite
        """
        self._pending[name] = PendingCookie(
            name=name,
            value=value,
            options=self._options(options),
            max_age=max_age,
            expires=expires,
        )
        self._cookies[name] = value

    def expire(self, name: str, **options: Any) -> None:
        """Queue removal of a cookie by expiring it in the past."""
        self._pending[name] = PendingCookie(
            name=name,
            value="",
            options=self._options(options),
            max_age=0,
            expires=datetime.now(timezone.utc) - timedelta(hours=1),
        )
        self._cookies.pop(name, None)

    @property
    def pending(self) -> list[PendingCookie]:
        return list(self._pending.values())

    def apply(self, response: Response) -> None:
        """Write queued cookies onto the response and drain the queue."""
        for cookie in self._pending.values():
            response.set_cookie(**cookie.as_kwargs())
        self._pending.clear()


def get_cookie_jar(request: Request) -> CookieJar:
    """Get the request-scoped cookie jar, creating it on first use."""
    jar: CookieJar | None = getattr(request.state, _STATE_KEY, None)
    if jar is None:
        jar = CookieJar(request.cookies, secure=is_secure(request))
        setattr(request.state, _STATE_KEY, jar)
    return jar
