"""CSRF protection for FastAPI applications."""

from .config import CsrfConfig as CsrfConfig
from .dependencies import get_csrf as get_csrf
from .dependencies import get_csrf_token as get_csrf_token
from .middleware import CsrfMiddleware as CsrfMiddleware
from .middleware import excluding_api as excluding_api
from .middleware import excluding_webhooks as excluding_webhooks
from .patterns import ExclusionMatcher as ExclusionMatcher
from .protection import CsrfProtection as CsrfProtection
from .protection import csrf_protection as csrf_protection
from .protection import normalize_body as normalize_body

__all__ = [
    "CsrfConfig",
    "CsrfMiddleware",
    "CsrfProtection",
    "ExclusionMatcher",
    "csrf_protection",
    "excluding_api",
    "excluding_webhooks",
    "get_csrf",
    "get_csrf_token",
    "normalize_body",
]
