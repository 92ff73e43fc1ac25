"""Tests for the request-scoped cookie jar."""

from fastapi import Response

from fastapi_securex.cookies import CookieJar
from fastapi_securex.cookies import get_cookie_jar


def test_get_and_has() -> None:
    jar = CookieJar({"theme": "dark", "empty": "", "zero": "0"})

    assert jar.get("theme") == "dark"
    assert jar.get("missing") is None
    assert jar.get("missing", "fallback") == "fallback"
    assert jar.has("theme")
    assert jar.has("empty")
    assert jar.has("zero")
    assert not jar.has("missing")


def test_set_is_visible_to_later_reads() -> None:
    jar = CookieJar({})
    jar.set("token", "abc")

    assert jar.get("token") == "abc"
    assert len(jar.pending) == 1


def test_set_uses_secure_defaults() -> None:
    jar = CookieJar({}, secure=True)
    jar.set("token", "abc")

    options = jar.pending[0].options
    assert options.path == "/"
    assert options.secure is True
    assert options.httponly is True
    assert options.samesite == "lax"


def test_set_options_override_defaults() -> None:
    jar = CookieJar({}, secure=True)
    jar.set("token", "abc", secure=False, samesite="strict", path="/app")

    options = jar.pending[0].options
    assert options.secure is False
    assert options.samesite == "strict"
    assert options.path == "/app"


def test_expire_removes_cookie() -> None:
    jar = CookieJar({"token": "abc"})
    jar.expire("token")

    assert jar.get("token") is None
    assert not jar.has("token")
    assert jar.pending[0].value == ""
    assert jar.pending[0].max_age == 0


def test_apply_writes_and_drains() -> None:
    jar = CookieJar({})
    jar.set("token", "abc", max_age=60, samesite="strict")
    response = Response()

    jar.apply(response)

    set_cookie = response.headers["set-cookie"]
    assert set_cookie.startswith("token=abc")
    assert "HttpOnly" in set_cookie
    assert "Max-Age=60" in set_cookie
    assert "SameSite=strict" in set_cookie
    assert jar.pending == []

    second = Response()
    jar.apply(second)
    assert "set-cookie" not in second.headers


def test_get_cookie_jar_is_request_scoped(make_request) -> None:
    request = make_request(cookies={"a": "1"}, scheme="https", server=("x", 443))
    jar = get_cookie_jar(request)

    assert jar is get_cookie_jar(request)
    assert jar.get("a") == "1"
    assert jar.secure is True
