"""Session configuration settings."""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict

SAMESITE_VALUES = ("Lax", "Strict", "None")
_TRUTHY = frozenset({"1", "true", "yes", "on"})
_FALSY = frozenset({"0", "false", "no", "off"})


class SessionConfig(BaseSettings):
    """Session configuration settings.

    Values not passed explicitly are read from ``SESSION_*`` environment
    variables, then fall back to the defaults below.
    """

    model_config = SettingsConfigDict(env_prefix="SESSION_", extra="ignore")

    # Session lifetime
    lifetime: int = Field(
        default=7200,
        gt=0,
        description="Idle lifetime in seconds (default: 2 hours)",
    )

    # Cookie settings
    cookie_name: str = Field(
        default="securex_session", description="Session cookie name"
    )
    cookie_path: str = Field(default="/", description="Cookie path")
    cookie_domain: str | None = Field(default=None, description="Cookie domain")
    cookie_secure: bool | str = Field(
        default="auto",
        description="Secure flag: true/false, or 'auto' for HTTPS-or-production",
    )
    cookie_samesite: str | None = Field(
        default="Strict",
        description="SameSite attribute; invalid values fall back to Strict",
    )

    # Security settings
    fingerprint_enabled: bool = Field(
        default=True,
        description="Whether to bind sessions to a client header fingerprint",
    )
    production: bool = Field(
        default=False,
        description="Production mode forces Secure cookies when cookie_secure is 'auto'",
    )

    # Backend settings
    backend_key_prefix: str = Field(
        default="session:",
        description="Prefix for session keys in backend storage",
    )

    def resolve_cookie_secure(self, request_secure: bool) -> bool:
        """Resolve the Secure cookie flag for a request.

        Args:
            request_secure: Whether the current request arrived over HTTPS

        Returns:
            The explicit setting, or HTTPS-or-production for 'auto' and
            unrecognised values
        """
        value = self.cookie_secure
        if isinstance(value, bool):
            return value

        normalized = value.strip().lower()
        if normalized in _TRUTHY:
            return True
        if normalized in _FALSY:
            return False

        return request_secure or self.production

    def resolve_samesite(self) -> Literal["Lax", "Strict", "None"]:
        """Normalize SameSite to Lax, Strict or None (Strict when invalid)."""
        value = self.cookie_samesite
        if not isinstance(value, str) or not value:
            return "Strict"

        normalized = value.strip().capitalize()
        if normalized not in SAMESITE_VALUES:
            return "Strict"
        return normalized  # type: ignore[return-value]
