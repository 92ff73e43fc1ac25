"""Tests for stateless CSRF protection."""

import re
from types import SimpleNamespace

import pytest
from pydantic import BaseModel

from fastapi_securex.cookies import CookieJar
from fastapi_securex.csrf import CsrfConfig
from fastapi_securex.csrf import CsrfProtection
from fastapi_securex.csrf import normalize_body

COOKIE = "__csrf_token"


@pytest.fixture
def jar() -> CookieJar:
    return CookieJar({})


@pytest.fixture
def csrf(jar: CookieJar) -> CsrfProtection:
    return CsrfProtection(jar)


def test_generate_creates_64_char_hex(csrf: CsrfProtection) -> None:
    token = csrf.generate()
    assert re.fullmatch(r"[0-9a-f]{64}", token)


def test_generate_sets_hardened_cookie(csrf: CsrfProtection, jar: CookieJar) -> None:
    token = csrf.generate()

    assert jar.get(COOKIE) == token
    cookie = jar.pending[0]
    assert cookie.name == COOKIE
    assert cookie.max_age == 86400
    assert cookie.options.httponly is True
    assert cookie.options.samesite == "strict"


def test_generate_creates_unique_tokens(csrf: CsrfProtection) -> None:
    tokens = {csrf.generate() for _ in range(10)}
    assert len(tokens) == 10


def test_current_returns_existing_cookie() -> None:
    csrf = CsrfProtection(CookieJar({COOKIE: "existing-token"}))
    assert csrf.current() == "existing-token"


def test_current_issues_token_when_missing(csrf: CsrfProtection, jar: CookieJar) -> None:
    token = csrf.current()

    assert len(token) == 64
    assert jar.get(COOKIE) == token
    assert csrf.current() == token


def test_validate_body_token(csrf: CsrfProtection) -> None:
    token = csrf.generate()

    assert csrf.validate({"csrfToken": token}, {})
    assert not csrf.validate({"csrfToken": "wrong"}, {})


def test_validate_without_candidate_fails(csrf: CsrfProtection) -> None:
    csrf.generate()
    assert not csrf.validate({}, {})


def test_validate_without_cookie_fails(csrf: CsrfProtection) -> None:
    assert not csrf.validate({"csrfToken": "anything"}, {})
    assert not csrf.validate({"csrfToken": ""}, {"X-CSRF-Token": ""})


def test_validate_after_delete_fails(csrf: CsrfProtection, jar: CookieJar) -> None:
    token = csrf.generate()
    csrf.delete()

    assert not jar.has(COOKIE)
    assert not csrf.validate({"csrfToken": token}, {})


@pytest.mark.parametrize("header", ["X-CSRF-Token", "x-csrf-token", "X-Csrf-Token"])
def test_validate_header_token(csrf: CsrfProtection, header: str) -> None:
    token = csrf.generate()
    assert csrf.validate({}, {header: token})


def test_body_token_takes_precedence(csrf: CsrfProtection) -> None:
    token = csrf.generate()
    assert not csrf.validate({"csrfToken": "wrong"}, {"X-CSRF-Token": token})


def test_validate_object_body(csrf: CsrfProtection) -> None:
    token = csrf.generate()
    assert csrf.validate(SimpleNamespace(csrfToken=token), {})


def test_validate_model_body(csrf: CsrfProtection) -> None:
    class Payload(BaseModel):
        csrfToken: str  # noqa: N815
        name: str

    token = csrf.generate()
    assert csrf.validate(Payload(csrfToken=token, name="Alice"), {})


def test_validate_rejects_non_string_candidate(csrf: CsrfProtection) -> None:
    csrf.generate()
    assert not csrf.validate({"csrfToken": ["a", "b"]}, {})
    assert not csrf.validate({"csrfToken": 12345}, {})


def test_rotate_returns_new_token(csrf: CsrfProtection, jar: CookieJar) -> None:
    token = csrf.generate()
    rotated = csrf.rotate()

    assert rotated != token
    assert jar.get(COOKIE) == rotated
    assert not csrf.validate({"csrfToken": token}, {})
    assert csrf.validate({"csrfToken": rotated}, {})


def test_delete_expires_cookie() -> None:
    jar = CookieJar({COOKIE: "abc"})
    CsrfProtection(jar).delete()

    assert jar.pending[0].value == ""
    assert jar.pending[0].max_age == 0


def test_delete_without_cookie_is_noop(csrf: CsrfProtection, jar: CookieJar) -> None:
    csrf.delete()
    assert jar.pending == []


def test_field_and_header_names(csrf: CsrfProtection) -> None:
    assert csrf.field_name == "csrfToken"
    assert csrf.header_name == "X-CSRF-Token"


def test_custom_config(jar: CookieJar) -> None:
    config = CsrfConfig(cookie_name="xsrf", field_name="_token", header_name="X-XSRF")
    csrf = CsrfProtection(jar, config)
    token = csrf.generate()

    assert jar.get("xsrf") == token
    assert csrf.validate({"_token": token}, {})
    assert csrf.validate({}, {"x-xsrf": token})


def test_normalize_body() -> None:
    assert normalize_body(None) == {}
    assert normalize_body({"a": 1}) == {"a": 1}
    assert normalize_body(SimpleNamespace(a=1)) == {"a": 1}
    assert normalize_body("csrfToken=abc") == {}
    assert normalize_body([("csrfToken", "abc")]) == {}
