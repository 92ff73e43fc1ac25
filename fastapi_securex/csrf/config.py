"""CSRF configuration settings."""

from typing import Literal

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field


class CsrfConfig(BaseModel):
    """CSRF configuration settings."""

    model_config = ConfigDict(frozen=True)

    cookie_name: str = Field(
        default="__csrf_token",
        description="Cookie holding the CSRF token (the source of truth)",
    )
    field_name: str = Field(
        default="csrfToken",
        description="Body field the token is echoed back in",
    )
    header_name: str = Field(
        default="X-CSRF-Token",
        description="Header the token is echoed back in (matched case-insensitively)",
    )
    cookie_lifetime: int = Field(
        default=86400,
        gt=0,
        description="CSRF cookie lifetime in seconds (default: 24 hours)",
    )
    cookie_path: str = Field(default="/", description="CSRF cookie path")
    cookie_domain: str | None = Field(default=None, description="CSRF cookie domain")
    cookie_samesite: Literal["lax", "strict", "none"] = Field(
        default="strict",
        description="SameSite attribute of the CSRF cookie",
    )
    token_bytes: int = Field(
        default=32,
        ge=16,
        description="Random bytes per token (hex encoded, so twice as many characters)",
    )
