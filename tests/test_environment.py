"""Tests for request environment helpers."""

from fastapi_securex import environment


class TestIsSecure:
    def test_https_scheme(self, make_request) -> None:
        assert environment.is_secure(make_request(scheme="https", server=("x", 8443)))

    def test_forwarded_proto(self, make_request) -> None:
        request = make_request(headers={"X-Forwarded-Proto": "https"})
        assert environment.is_secure(request)

    def test_forwarded_ssl(self, make_request) -> None:
        request = make_request(headers={"X-Forwarded-SSL": "on"})
        assert environment.is_secure(request)

    def test_port_443(self, make_request) -> None:
        assert environment.is_secure(make_request(server=("example.com", 443)))

    def test_plain_http(self, make_request) -> None:
        assert not environment.is_secure(make_request())


class TestContentNegotiation:
    def test_ajax(self, make_request) -> None:
        request = make_request(headers={"X-Requested-With": "XMLHttpRequest"})
        assert environment.is_ajax(request)
        assert not environment.is_ajax(make_request())

    def test_json_request_from_accept(self, make_request) -> None:
        request = make_request(headers={"Accept": "application/json"})
        assert environment.is_json_request(request)

    def test_json_request_from_ajax(self, make_request) -> None:
        request = make_request(headers={"X-Requested-With": "xmlhttprequest"})
        assert environment.is_json_request(request)

    def test_html_request(self, make_request) -> None:
        request = make_request(headers={"Accept": "text/html"})
        assert not environment.is_json_request(request)

    def test_json_body(self, make_request) -> None:
        assert environment.is_json_body(
            make_request(headers={"Content-Type": "application/json; charset=utf-8"})
        )
        assert environment.is_json_body(
            make_request(headers={"Content-Type": "application/vnd.api+json"})
        )
        assert not environment.is_json_body(
            make_request(headers={"Content-Type": "application/x-www-form-urlencoded"})
        )


class TestClientIp:
    def test_peer_address(self, make_request) -> None:
        request = make_request(client=("192.168.1.1", 1234))
        assert environment.client_ip(request) == "192.168.1.1"

    def test_prefers_cloudflare(self, make_request) -> None:
        request = make_request(
            headers={"CF-Connecting-IP": "203.0.113.5", "X-Forwarded-For": "10.0.0.1"}
        )
        assert environment.client_ip(request) == "203.0.113.5"

    def test_forwarded_for_first_entry(self, make_request) -> None:
        request = make_request(headers={"X-Forwarded-For": "192.168.1.1, 10.0.0.1"})
        assert environment.client_ip(request) == "192.168.1.1"

    def test_real_ip(self, make_request) -> None:
        request = make_request(headers={"X-Real-IP": "2001:db8::1"}, client=None)
        assert environment.client_ip(request) == "2001:db8::1"

    def test_skips_invalid_values(self, make_request) -> None:
        request = make_request(
            headers={"X-Forwarded-For": "not-an-ip"}, client=("10.1.2.3", 1)
        )
        assert environment.client_ip(request) == "10.1.2.3"

    def test_unknown(self, make_request) -> None:
        request = make_request(client=None)
        assert environment.client_ip(request) == "0.0.0.0"  # noqa: S104


def test_user_agent(make_request) -> None:
    assert environment.user_agent(make_request(headers={"User-Agent": "Test/1.0"})) == "Test/1.0"
    assert environment.user_agent(make_request()) == ""
