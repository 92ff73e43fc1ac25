"""Stateless CSRF protection.

The token lives only in a cookie; there is no server-side token store.
Clients echo it back in a body field or header, and the two values are
compared in constant time.
"""

import hmac
import secrets
from collections.abc import Mapping
from datetime import datetime
from datetime import timedelta
from datetime import timezone
from logging import getLogger
from typing import Any

from fastapi import Request
from pydantic import BaseModel

from fastapi_securex.cookies import CookieJar
from fastapi_securex.cookies import get_cookie_jar

from .config import CsrfConfig

logger = getLogger(__name__)


def normalize_body(body: Any) -> dict[str, Any]:
    """Convert any body representation into a plain dict.

    Mappings (including form data) are copied, pydantic models are dumped,
    plain objects contribute their attributes. Anything else is empty.
    """
    if body is None:
        return {}
    if isinstance(body, Mapping):
        return dict(body.items())
    if isinstance(body, BaseModel):
        return body.model_dump()
    if isinstance(body, (str, bytes, int, float, bool, list, tuple)):
        return {}
    try:
        return dict(vars(body))
    except TypeError:
        return {}


class CsrfProtection:
    """Issues, rotates and validates the CSRF token of one request."""

    def __init__(self, cookies: CookieJar, config: CsrfConfig | None = None) -> None:
        self.cookies = cookies
        self.config = config or CsrfConfig()

    @property
    def field_name(self) -> str:
        return self.config.field_name

    @property
    def header_name(self) -> str:
        return self.config.header_name

    def generate(self) -> str:
        """Generate a new token and store it in the CSRF cookie."""
        token = secrets.token_hex(self.config.token_bytes)
        lifetime = self.config.cookie_lifetime
        self.cookies.set(
            self.config.cookie_name,
            token,
            max_age=lifetime,
            expires=datetime.now(timezone.utc) + timedelta(seconds=lifetime),
            path=self.config.cookie_path,
            domain=self.config.cookie_domain,
            httponly=True,
            samesite=self.config.cookie_samesite,
        )
        return token

    def current(self) -> str:
        """Get the current token, issuing one if the client has none."""
        token = self.cookies.get(self.config.cookie_name)
        if token:
            return token
        return self.generate()

    def rotate(self) -> str:
        """Replace the current token with a fresh one."""
        return self.generate()

    def delete(self) -> None:
        """Remove the CSRF cookie (e.g. on logout)."""
        if self.cookies.has(self.config.cookie_name):
            self.cookies.expire(
                self.config.cookie_name,
                path=self.config.cookie_path,
                domain=self.config.cookie_domain,
                httponly=True,
                samesite=self.config.cookie_samesite,
            )

    def _candidate(self, body: Mapping[str, Any], headers: Mapping[str, str]) -> Any:
        candidate = body.get(self.config.field_name)
        if candidate:
            return candidate

        wanted = self.config.header_name.lower()
        for key, value in headers.items():
            if key.lower() == wanted:
                return value
        return None

    def validate(self, body: Any, headers: Mapping[str, str] | None = None) -> bool:
        """Check the token echoed by the client against the cookie.

        Fails closed: a missing cookie or a missing candidate is a failure.

        Args:
            body: Request body in any shape (mapping, model or object)
            headers: Request headers

        Returns:
            True only when the candidate equals the cookie token
        """
        cookie_token = self.cookies.get(self.config.cookie_name)
        if not cookie_token:
            logger.debug("CSRF validation failed: no token cookie")
            return False

        candidate = self._candidate(normalize_body(body), headers or {})
        if not candidate or not isinstance(candidate, str):
            logger.debug("CSRF validation failed: no token supplied")
            return False

        return hmac.compare_digest(cookie_token.encode(), candidate.encode())


def csrf_protection(request: Request, config: CsrfConfig | None = None) -> CsrfProtection:
    """Build a CSRF service bound to the request's cookie jar."""
    return CsrfProtection(get_cookie_jar(request), config)
