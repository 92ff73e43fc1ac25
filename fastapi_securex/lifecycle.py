"""Helpers for authentication state changes.

Call ``on_login`` right after a user authenticates and ``on_logout`` when
they sign out, so neither the session ID nor the CSRF token survives a
privilege change.
"""

from fastapi import Request

from .csrf.dependencies import get_csrf
from .session.dependencies import get_session


async def on_login(request: Request) -> str:
    """Regenerate the session and rotate the CSRF token.

    Returns:
        The new CSRF token
    """
    session = await get_session(request)
    await session.regenerate(delete_old=True)
    return get_csrf(request).rotate()


async def on_logout(request: Request) -> None:
    """Destroy the session and delete the CSRF cookie."""
    session = await get_session(request)
    await session.destroy()
    get_csrf(request).delete()
