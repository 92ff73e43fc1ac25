"""FastAPI-SecureX: CSRF protection, fingerprinted sessions and security headers for FastAPI."""

from .backends import MemoryBackend as MemoryBackend
from .cookies import CookieJar as CookieJar
from .cookies import get_cookie_jar as get_cookie_jar
from .csrf import CsrfConfig as CsrfConfig
from .csrf import CsrfMiddleware as CsrfMiddleware
from .csrf import CsrfProtection as CsrfProtection
from .csrf import excluding_api as excluding_api
from .csrf import excluding_webhooks as excluding_webhooks
from .csrf import get_csrf_token as get_csrf_token
from .exceptions import ConfigurationError as ConfigurationError
from .exceptions import CsrfMismatchError as CsrfMismatchError
from .exceptions import SecureXError as SecureXError
from .headers import SecurityHeaders as SecurityHeaders
from .headers import SecurityHeadersMiddleware as SecurityHeadersMiddleware
from .lifecycle import on_login as on_login
from .lifecycle import on_logout as on_logout
from .method_override import MethodOverrideMiddleware as MethodOverrideMiddleware
from .session import SessionConfig as SessionConfig
from .session import SessionMiddleware as SessionMiddleware
from .session import SessionStore as SessionStore
from .session import get_session as get_session

__all__ = [
    "ConfigurationError",
    "CookieJar",
    "CsrfConfig",
    "CsrfMiddleware",
    "CsrfMismatchError",
    "CsrfProtection",
    "MemoryBackend",
    "MethodOverrideMiddleware",
    "SecureXError",
    "SecurityHeaders",
    "SecurityHeadersMiddleware",
    "SessionConfig",
    "SessionMiddleware",
    "SessionStore",
    "excluding_api",
    "excluding_webhooks",
    "get_cookie_jar",
    "get_csrf_token",
    "get_session",
    "on_login",
    "on_logout",
]
