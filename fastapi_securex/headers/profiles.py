"""Security header policies and their named profiles."""

from collections.abc import Mapping
from typing import Any

from fastapi_securex.exceptions import ConfigurationError
from fastapi_securex.types import HeaderDirective
from fastapi_securex.types import HeaderValue

from .config import SecurityHeadersSettings

DISABLED = HeaderDirective.DISABLED

FRAME_OPTIONS = "X-Frame-Options"
CONTENT_TYPE_OPTIONS = "X-Content-Type-Options"
XSS_PROTECTION = "X-XSS-Protection"
REFERRER_POLICY = "Referrer-Policy"
PERMISSIONS_POLICY = "Permissions-Policy"
HSTS = "Strict-Transport-Security"
CSP = "Content-Security-Policy"

DEFAULT_HSTS = "max-age=31536000; includeSubDomains"

MINIMAL: dict[str, HeaderValue] = {
    CONTENT_TYPE_OPTIONS: "nosniff",
    FRAME_OPTIONS: "SAMEORIGIN",
    XSS_PROTECTION: DISABLED,
    REFERRER_POLICY: DISABLED,
    PERMISSIONS_POLICY: DISABLED,
}

RECOMMENDED: dict[str, HeaderValue] = {
    FRAME_OPTIONS: "DENY",
    CONTENT_TYPE_OPTIONS: "nosniff",
    XSS_PROTECTION: "1; mode=block",
    REFERRER_POLICY: "strict-origin-when-cross-origin",
    PERMISSIONS_POLICY: "geolocation=(), microphone=(), camera=()",
}

STRICT: dict[str, HeaderValue] = {
    FRAME_OPTIONS: "DENY",
    CONTENT_TYPE_OPTIONS: "nosniff",
    XSS_PROTECTION: "1; mode=block",
    REFERRER_POLICY: "no-referrer",
    PERMISSIONS_POLICY: (
        "geolocation=(), microphone=(), camera=(), payment=(), usb=(), "
        "magnetometer=(), gyroscope=(), accelerometer=()"
    ),
    HSTS: "max-age=63072000; includeSubDomains; preload",
    CSP: (
        "default-src 'self'; script-src 'self' 'unsafe-inline'; "
        "style-src 'self' 'unsafe-inline'; img-src 'self' data: https:; "
        "font-src 'self' data:; connect-src 'self'; frame-ancestors 'none'; "
        "base-uri 'self'; form-action 'self'"
    ),
}

API: dict[str, HeaderValue] = {
    CONTENT_TYPE_OPTIONS: "nosniff",
    FRAME_OPTIONS: "DENY",
    REFERRER_POLICY: "no-referrer",
    XSS_PROTECTION: DISABLED,
    PERMISSIONS_POLICY: DISABLED,
}


def normalize_value(name: str, value: Any) -> HeaderValue:
    """Map caller input onto a header value; ``False`` and ``None`` disable."""
    if value is None or value is False or value is DISABLED:
        return DISABLED
    if isinstance(value, str):
        return value
    msg = f"Invalid value for header {name!r}: {value!r}"
    raise ConfigurationError(msg)


def _settings_defaults(settings: SecurityHeadersSettings) -> dict[str, HeaderValue]:
    defaults: dict[str, HeaderValue] = {
        FRAME_OPTIONS: settings.frame_options or "DENY",
        CONTENT_TYPE_OPTIONS: settings.content_type_options or "nosniff",
        XSS_PROTECTION: settings.xss_protection or "1; mode=block",
        REFERRER_POLICY: settings.referrer_policy or "strict-origin-when-cross-origin",
        PERMISSIONS_POLICY: settings.permissions_policy or DISABLED,
    }
    if settings.hsts_enabled:
        defaults[HSTS] = settings.hsts_value or DEFAULT_HSTS
    if settings.csp:
        defaults[CSP] = settings.csp
    return defaults


class SecurityHeaders:
    """An immutable set of security headers.

    Each header is either a string value or ``DISABLED``; disabled headers
    are never written, whatever the profile default was.
    """

    def __init__(
        self,
        defaults: Mapping[str, HeaderValue],
        overrides: Mapping[str, Any] | None = None,
    ) -> None:
        merged = {name: normalize_value(name, v) for name, v in defaults.items()}
        names = {name.lower(): name for name in merged}
        for name, value in (overrides or {}).items():
            # Header names are case-insensitive; keep the profile's spelling
            key = names.setdefault(name.lower(), name)
            merged[key] = normalize_value(name, value)
        self._headers = merged

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._headers!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SecurityHeaders):
            return NotImplemented
        return self._headers == other._headers

    @property
    def headers(self) -> dict[str, HeaderValue]:
        """Every configured header, including disabled ones."""
        return dict(self._headers)

    def resolved(self) -> dict[str, str]:
        """The headers to write, disabled ones omitted."""
        return {
            name: value
            for name, value in self._headers.items()
            if value is not DISABLED
        }

    @classmethod
    def default(
        cls,
        overrides: Mapping[str, Any] | None = None,
        settings: SecurityHeadersSettings | None = None,
    ) -> "SecurityHeaders":
        """Headers from ``SECURITY_*`` settings with built-in fallbacks."""
        return cls(_settings_defaults(settings or SecurityHeadersSettings()), overrides)

    @classmethod
    def with_headers(cls, headers: Mapping[str, Any]) -> "SecurityHeaders":
        return cls.default(headers)

    @classmethod
    def minimal(cls, overrides: Mapping[str, Any] | None = None) -> "SecurityHeaders":
        return cls(MINIMAL, overrides)

    @classmethod
    def recommended(
        cls, overrides: Mapping[str, Any] | None = None
    ) -> "SecurityHeaders":
        return cls(RECOMMENDED, overrides)

    @classmethod
    def strict(cls, overrides: Mapping[str, Any] | None = None) -> "SecurityHeaders":
        return cls(STRICT, overrides)

    @classmethod
    def api(cls, overrides: Mapping[str, Any] | None = None) -> "SecurityHeaders":
        return cls(API, overrides)

    @classmethod
    def from_profile(
        cls, profile: str, overrides: Mapping[str, Any] | None = None
    ) -> "SecurityHeaders":
        """Build a named profile (``minimal``, ``recommended``, ``strict``, ``api``)."""
        factories = {
            "minimal": cls.minimal,
            "recommended": cls.recommended,
            "strict": cls.strict,
            "api": cls.api,
        }
        try:
            factory = factories[profile.lower()]
        except KeyError:
            msg = f"Unknown security headers profile: {profile!r}"
            raise ConfigurationError(msg) from None
        return factory(overrides)
