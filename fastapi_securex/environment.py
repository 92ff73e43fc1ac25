"""Helpers that inspect the incoming request's transport and client details."""

import ipaddress

from fastapi import Request

UNKNOWN_IP = "0.0.0.0"  # noqa: S104

# Checked in order; the first valid address wins
_IP_HEADERS = ("cf-connecting-ip", "x-forwarded-for", "x-real-ip")


def is_secure(request: Request) -> bool:
    """Whether the request reached us over HTTPS (directly or via a proxy)."""
    if request.url.scheme in ("https", "wss"):
        return True

    headers = request.headers
    if headers.get("x-forwarded-proto", "").lower() == "https":
        return True

    if headers.get("x-forwarded-ssl", "").lower() == "on":
        return True

    server = request.scope.get("server")
    return bool(server) and server[1] == 443


def is_ajax(request: Request) -> bool:
    return request.headers.get("x-requested-with", "").lower() == "xmlhttprequest"


def is_json_request(request: Request) -> bool:
    """Whether the client expects a JSON response."""
    if "application/json" in request.headers.get("accept", "").lower():
        return True
    return is_ajax(request)


def is_json_body(request: Request) -> bool:
    """Whether the request body declares JSON content."""
    return "json" in request.headers.get("content-type", "").lower()


def _valid_ip(value: str) -> str | None:
    candidate = value.split(",")[0].strip()
    try:
        ipaddress.ip_address(candidate)
    except ValueError:
        return None
    return candidate


def client_ip(request: Request) -> str:
    """Get the client IP, honouring the usual proxy headers.

    Returns:
        The first valid address found, or ``0.0.0.0`` when none is
    """
    for header in _IP_HEADERS:
        value = request.headers.get(header)
        if value and (ip := _valid_ip(value)):
            return ip

    if request.client and request.client.host:
        if ip := _valid_ip(request.client.host):
            return ip

    return UNKNOWN_IP


def user_agent(request: Request) -> str:
    return request.headers.get("user-agent", "")
