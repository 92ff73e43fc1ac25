"""HTML form method override."""

from collections.abc import Awaitable
from collections.abc import Callable
from logging import getLogger

from fastapi import Request
from fastapi import Response
from starlette.exceptions import HTTPException
from starlette.formparsers import MultiPartException
from starlette.middleware.base import BaseHTTPMiddleware

logger = getLogger(__name__)

FIELD_NAME = "_method"
HEADER_NAME = "X-HTTP-Method-Override"
ALLOWED_METHODS = frozenset({"PUT", "PATCH", "DELETE"})

_FORM_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


class MethodOverrideMiddleware(BaseHTTPMiddleware):
    """Lets a POST act as PUT, PATCH or DELETE.

    The method is taken from the ``_method`` form field, then from the
    ``X-HTTP-Method-Override`` header. Install it outside CsrfMiddleware so
    the CSRF check sees the effective method.
    """

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        if request.method == "POST":
            method = await self.get_override(request)
            if method is not None:
                logger.debug("Overriding POST with %s for %s", method, request.url.path)
                request.scope["method"] = method

        return await call_next(request)

    async def get_override(self, request: Request) -> str | None:
        value = None

        content_type = request.headers.get("content-type", "").lower()
        if content_type.startswith(_FORM_TYPES):
            await request.body()
            try:
                form = await request.form()
            except (HTTPException, MultiPartException):
                logger.debug("Unreadable form body on %s", request.url.path)
            else:
                value = form.get(FIELD_NAME)

        if value is None:
            value = request.headers.get(HEADER_NAME)

        if not isinstance(value, str):
            return None

        method = value.strip().upper()
        if method not in ALLOWED_METHODS:
            return None
        return method
