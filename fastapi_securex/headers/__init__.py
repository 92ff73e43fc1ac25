"""Security response headers for FastAPI applications."""

from .config import SecurityHeadersSettings as SecurityHeadersSettings
from .middleware import SecurityHeadersMiddleware as SecurityHeadersMiddleware
from .profiles import DISABLED as DISABLED
from .profiles import SecurityHeaders as SecurityHeaders

__all__ = [
    "DISABLED",
    "SecurityHeaders",
    "SecurityHeadersMiddleware",
    "SecurityHeadersSettings",
]
