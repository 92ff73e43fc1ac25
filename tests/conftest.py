from collections.abc import Callable
from typing import Any

import pytest
from fastapi import Request


def build_request(
    method: str = "GET",
    path: str = "/",
    headers: dict[str, str] | None = None,
    cookies: dict[str, str] | None = None,
    scheme: str = "http",
    server: tuple[str, int] = ("testserver", 80),
    client: tuple[str, int] | None = ("127.0.0.1", 50000),
    body: bytes = b"",
) -> Request:
    raw_headers = [
        (name.lower().encode(), value.encode()) for name, value in (headers or {}).items()
    ]
    if cookies:
        cookie_header = "; ".join(f"{k}={v}" for k, v in cookies.items())
        raw_headers.append((b"cookie", cookie_header.encode()))

    scope: dict[str, Any] = {
        "type": "http",
        "method": method,
        "path": path,
        "raw_path": path.encode(),
        "root_path": "",
        "query_string": b"",
        "headers": raw_headers,
        "scheme": scheme,
        "server": server,
        "client": client,
        "state": {},
    }

    async def receive() -> dict[str, Any]:
        return {"type": "http.request", "body": body, "more_body": False}

    return Request(scope, receive)


@pytest.fixture
def make_request() -> Callable[..., Request]:
    """Factory for Starlette requests built from a raw ASGI scope."""
    return build_request
