"""Server-side sessions bound to a client fingerprint."""

import html
import secrets
import time
from collections.abc import Callable
from collections.abc import Mapping
from enum import Enum
from logging import getLogger
from typing import Any

from fastapi import Request

from fastapi_securex import fingerprint
from fastapi_securex.backends import BaseSessionBackend
from fastapi_securex.cookies import CookieJar
from fastapi_securex.cookies import get_cookie_jar
from fastapi_securex.environment import is_secure
from fastapi_securex.exceptions import SessionNotStartedError

from .config import SessionConfig

logger = getLogger(__name__)

FINGERPRINT_KEY = "__fingerprint"
LAST_ACTIVITY_KEY = "__last_activity"
FLASH_KEY = "FLASH_MESSAGES"


class FlashLevel(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"
    SUCCESS = "success"


def new_session_id() -> str:
    return secrets.token_urlsafe(32)


class SessionStore:
    """One client's session for the duration of a request.

    The payload is loaded by ``start`` and written back by ``save``.
    Session IDs are only read from the session cookie and are never adopted
    unless the backend already knows them.

    Args:
        backend: Storage for session payloads
        cookies: The request's cookie jar
        headers: The request headers (used for fingerprinting)
        config: Session settings
        secure_request: Whether the request arrived over HTTPS
        clock: Returns the current epoch time in seconds
    """

    def __init__(
        self,
        backend: BaseSessionBackend,
        cookies: CookieJar,
        headers: Mapping[str, str],
        config: SessionConfig | None = None,
        secure_request: bool = False,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.backend = backend
        self.cookies = cookies
        self.headers = headers
        self.config = config or SessionConfig()
        self.secure_request = secure_request
        self.clock = clock

        self.session_id: str | None = None
        self._payload: dict[str, Any] = {}
        self._started = False
        self._issue_cookie = False

    @classmethod
    def from_request(
        cls,
        request: Request,
        backend: BaseSessionBackend,
        config: SessionConfig | None = None,
    ) -> "SessionStore":
        return cls(
            backend,
            get_cookie_jar(request),
            request.headers,
            config,
            secure_request=is_secure(request),
        )

    @property
    def is_active(self) -> bool:
        return self._started

    def _key(self, session_id: str) -> str:
        return f"{self.config.backend_key_prefix}{session_id}"

    def _require_started(self) -> dict[str, Any]:
        if not self._started:
            msg = "Session has not been started"
            raise SessionNotStartedError(msg)
        return self._payload

    async def start(self) -> None:
        """Load or create the session.

        A stored fingerprint that no longer matches the client wipes the
        session and starts a fresh, anonymous one.
        """
        if self._started:
            return

        incoming = self.cookies.get(self.config.cookie_name)
        payload = await self.backend.get(self._key(incoming)) if incoming else None

        if payload is None:
            self._begin(new_session_id(), {})
        else:
            self.session_id = incoming
            self._payload = payload
            self._started = True

        if self.config.fingerprint_enabled:
            if FINGERPRINT_KEY not in self._payload:
                self._stamp_fingerprint()
            elif not fingerprint.validate(self._payload[FINGERPRINT_KEY], self.headers):
                logger.info("Session fingerprint mismatch, starting a new session")
                await self._restart()

    def _begin(self, session_id: str, payload: dict[str, Any]) -> None:
        self.session_id = session_id
        self._payload = payload
        self._started = True
        self._issue_cookie = True

    async def _restart(self) -> None:
        if self.session_id is not None:
            await self.backend.delete(self._key(self.session_id))
        self._begin(new_session_id(), {})

    def _stamp_fingerprint(self) -> None:
        self._payload[FINGERPRINT_KEY] = fingerprint.for_session(self.headers)

    def get(self, key: str, default: Any = None) -> Any:
        return self._require_started().get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._require_started()[key] = value

    def has(self, key: str) -> bool:
        return self._require_started().get(key) is not None

    def remove(self, key: str) -> None:
        self._require_started().pop(key, None)

    def all(self) -> dict[str, Any]:
        return dict(self._require_started())

    async def regenerate(self, delete_old: bool = True) -> None:
        """Move the session to a new ID, e.g. after login.

        Args:
            delete_old: Discard the old ID's stored payload
        """
        await self.start()
        old_id = self.session_id
        if delete_old and old_id is not None:
            await self.backend.delete(self._key(old_id))

        self._begin(new_session_id(), self._payload)
        self._stamp_fingerprint()
        logger.debug("Session regenerated")

    async def destroy(self) -> None:
        """End the session and continue with an empty, unfingerprinted one.

        The replacement only reaches the backend and the client if something
        is written to it before ``save``.
        """
        await self.start()
        await self._restart()
        self.cookies.expire(
            self.config.cookie_name,
            path=self.config.cookie_path,
            domain=self.config.cookie_domain,
        )

    async def is_valid(self) -> bool:
        """Check the session is fingerprinted and not idle for too long.

        Refreshes the last-activity timestamp; an idle session is destroyed.
        """
        await self.start()
        if FINGERPRINT_KEY not in self._payload:
            return False

        now = self.clock()
        last_activity = self._payload.get(LAST_ACTIVITY_KEY)
        if last_activity is None:
            self._payload[LAST_ACTIVITY_KEY] = now
            return True

        if now - last_activity > self.config.lifetime:
            logger.info("Session idle for longer than %ss, destroying", self.config.lifetime)
            await self.destroy()
            return False

        self._payload[LAST_ACTIVITY_KEY] = now
        return True

    def flash(
        self, name: str, message: str, level: FlashLevel | str = FlashLevel.INFO
    ) -> None:
        """Store a one-shot message for the next request."""
        messages = dict(self.get(FLASH_KEY) or {})
        messages.pop(name, None)
        messages[name] = {"message": message, "type": FlashLevel(level).value}
        self.set(FLASH_KEY, messages)

    def pop_flash(self, name: str, escape: bool = True) -> dict[str, str] | None:
        """Take a flash message out of the session.

        Args:
            name: Message name
            escape: HTML-escape the message and type

        Returns:
            ``{"message": ..., "type": ...}`` or None when absent
        """
        messages = dict(self.get(FLASH_KEY) or {})
        if name not in messages:
            return None

        flash_message = dict(messages.pop(name))
        self.set(FLASH_KEY, messages)

        if escape:
            flash_message = {
                key: html.escape(str(value), quote=True)
                for key, value in flash_message.items()
            }
        return flash_message

    async def save(self) -> None:
        """Persist the payload and queue the session cookie if it changed."""
        if not self._started or self.session_id is None:
            return
        if self._issue_cookie and not self._payload:
            # Nothing worth a cookie yet
            return

        await self.backend.set(
            self._key(self.session_id), self._payload, ttl=self.config.lifetime
        )

        if self._issue_cookie:
            self.cookies.set(
                self.config.cookie_name,
                self.session_id,
                path=self.config.cookie_path,
                domain=self.config.cookie_domain,
                secure=self.config.resolve_cookie_secure(self.secure_request),
                httponly=True,
                samesite=self.config.resolve_samesite().lower(),
            )
            self._issue_cookie = False
