"""Tests for state generation, authorize URL building and the code exchange."""
import re
from unittest.mock import patch
from urllib.parse import parse_qs, urlparse

import httpx
import pytest

from webid_demo.errors import TokenExchangeError
from webid_demo.oauth import build_authorize_url, exchange_code, generate_state, redirect_uri_for


class MockResponse:
    def __init__(self, status_code=200, body=None):
        self.status_code = status_code
        self._body = body

    def json(self):
        if self._body is None:
            raise ValueError("no json")
        return self._body


def test_generate_state_is_random_and_urlsafe():
    a, b = generate_state(), generate_state()
    assert a != b
    assert len(a) >= 32
    assert re.match(r"^[A-Za-z0-9_-]+$", a)


def test_redirect_uri_for():
    assert redirect_uri_for("localhost:8080") == "http://localhost:8080/auth/gg/redirect"


def test_build_authorize_url_includes_required_params():
    url = build_authorize_url(
        redirect_uri="http://localhost:8080/auth/gg/redirect",
        state="mystate",
        client_id="client1",
    )
    assert url.startswith("https://accounts.google.com/o/oauth2/v2/auth?")
    params = parse_qs(urlparse(url).query)
    assert params["client_id"] == ["client1"]
    assert params["response_type"] == ["code"]
    assert params["redirect_uri"] == ["http://localhost:8080/auth/gg/redirect"]
    assert params["state"] == ["mystate"]
    assert params["scope"] == ["openid email"]


def test_exchange_code_success_posts_form():
    body = {"access_token": "at", "id_token": "idt", "expires_in": 3599, "scope": "openid email"}
    with patch("webid_demo.oauth.httpx.post", return_value=MockResponse(200, body)) as post:
        tokens = exchange_code("ABC", "http://localhost:8080/auth/gg/redirect")
    assert tokens.access_token == "at"
    assert tokens.id_token == "idt"
    assert tokens.expires_in == 3599
    form = post.call_args.kwargs["data"]
    assert form["code"] == "ABC"
    assert form["grant_type"] == "authorization_code"
    assert form["redirect_uri"] == "http://localhost:8080/auth/gg/redirect"
    assert "client_secret" in form


def test_exchange_code_error_response():
    body = {"error": "invalid_grant", "error_description": "Bad Request"}
    with patch("webid_demo.oauth.httpx.post", return_value=MockResponse(400, body)):
        with pytest.raises(TokenExchangeError, match="Bad Request"):
            exchange_code("ABC", "http://x/auth/gg/redirect")


def test_exchange_code_non_json_error_response():
    with patch("webid_demo.oauth.httpx.post", return_value=MockResponse(502)):
        with pytest.raises(TokenExchangeError, match="HTTP 502"):
            exchange_code("ABC", "http://x/auth/gg/redirect")


def test_exchange_code_missing_id_token():
    with patch("webid_demo.oauth.httpx.post", return_value=MockResponse(200, {"access_token": "at"})):
        with pytest.raises(TokenExchangeError, match="id_token"):
            exchange_code("ABC", "http://x/auth/gg/redirect")


def test_exchange_code_transport_failure():
    with patch("webid_demo.oauth.httpx.post", side_effect=httpx.ConnectError("boom")):
        with pytest.raises(TokenExchangeError, match="unreachable"):
            exchange_code("ABC", "http://x/auth/gg/redirect")


def test_exchange_code_non_object_json_body():
    with patch("webid_demo.oauth.httpx.post", return_value=MockResponse(200, ["not", "an", "object"])):
        with pytest.raises(TokenExchangeError, match="unexpected response body"):
            exchange_code("ABC", "http://x/auth/gg/redirect")
