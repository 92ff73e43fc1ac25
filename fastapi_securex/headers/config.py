"""Environment-driven defaults for the security headers."""

from pydantic import Field
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict


class SecurityHeadersSettings(BaseSettings):
    """Security header settings read from ``SECURITY_*`` environment variables.

    Empty values fall back to the built-in defaults.
    """

    model_config = SettingsConfigDict(env_prefix="SECURITY_", extra="ignore")

    frame_options: str | None = Field(default=None, description="X-Frame-Options")
    content_type_options: str | None = Field(
        default=None, description="X-Content-Type-Options"
    )
    xss_protection: str | None = Field(default=None, description="X-XSS-Protection")
    referrer_policy: str | None = Field(default=None, description="Referrer-Policy")
    permissions_policy: str | None = Field(
        default=None,
        description="Permissions-Policy (omitted when unset)",
    )
    hsts_enabled: bool = Field(
        default=False,
        description="Whether to send Strict-Transport-Security",
    )
    hsts_value: str | None = Field(
        default=None,
        description="Strict-Transport-Security value when enabled",
    )
    csp: str | None = Field(
        default=None,
        description="Content-Security-Policy (omitted when unset)",
    )
