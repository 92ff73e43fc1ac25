from fastapi import Request

from .middleware import STATE_KEY
from .protection import CsrfProtection
from .protection import csrf_protection


def get_csrf(request: Request) -> CsrfProtection:
    """FastAPI dependency to get the request's CSRF service.

    Falls back to a default-configured service when no CsrfMiddleware is
    installed; cookies it issues are then written by SessionMiddleware
    or must be applied by the caller.
    """
    csrf: CsrfProtection | None = getattr(request.state, STATE_KEY, None)
    if csrf is None:
        csrf = csrf_protection(request)
        setattr(request.state, STATE_KEY, csrf)
    return csrf


def get_csrf_token(request: Request) -> str:
    """FastAPI dependency to get (or lazily issue) the CSRF token."""
    return get_csrf(request).current()
