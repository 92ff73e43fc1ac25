"""Type definitions and shared constants for FastAPI-SecureX."""

from dataclasses import dataclass
from dataclasses import field
from datetime import datetime
from enum import Enum
from typing import Any
from typing import Literal
from typing import Union

SameSite = Literal["lax", "strict", "none"]

# Methods that change server state and therefore require a CSRF token
PROTECTED_METHODS = frozenset({"POST", "PUT", "PATCH", "DELETE"})


class HeaderDirective(Enum):
    """Explicit marker for a header that must not be sent."""

    DISABLED = "disabled"


HeaderValue = Union[str, Literal[HeaderDirective.DISABLED]]


@dataclass
class CookieOptions:
    """Attributes of a Set-Cookie header."""

    path: str = "/"
    domain: str | None = None
    secure: bool = False
    httponly: bool = True
    samesite: SameSite = "lax"


@dataclass
class PendingCookie:
    """A cookie queued to be written on the response.

    Args:
        name: Cookie name
        value: Cookie value (empty string when expiring)
        options: Cookie attributes
        max_age: Max-Age in seconds (None = session cookie)
        expires: Absolute expiry (aware datetime)
    """

    name: str
    value: str
    options: CookieOptions = field(default_factory=CookieOptions)
    max_age: int | None = None
    expires: datetime | None = None

    def as_kwargs(self) -> dict[str, Any]:
        return {
            "key": self.name,
            "value": self.value,
            "max_age": self.max_age,
            "expires": self.expires,
            "path": self.options.path,
            "domain": self.options.domain,
            "secure": self.options.secure,
            "httponly": self.options.httponly,
            "samesite": self.options.samesite,
        }


@dataclass
class SessionItem:
    """Stored session payload with optional expiry time.

    Args:
        payload: The session's key-value data
        expiry: Epoch timestamp when this session expires (None = never expires)
    """

    payload: dict[str, Any]
    expiry: float | None = None
