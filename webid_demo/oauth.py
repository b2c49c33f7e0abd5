"""
Google OAuth2 authorization-code flow helpers: state generation, authorize URL, code exchange.
"""
import logging
import secrets
from dataclasses import dataclass
from urllib.parse import urlencode

import httpx

from webid_demo.config import (
    GOOGLE_AUTH_ENDPOINT,
    GOOGLE_CLIENT_ID,
    GOOGLE_CLIENT_SECRET,
    GOOGLE_SCOPE,
    GOOGLE_TOKEN_ENDPOINT,
    HTTP_TIMEOUT,
)
from webid_demo.errors import TokenExchangeError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TokenResponse:
    access_token: str
    id_token: str
    expires_in: int = 0
    scope: str = ""


def generate_state() -> str:
    """Opaque value for CSRF protection; returned in callback."""
    return secrets.token_urlsafe(32)


def redirect_uri_for(base_url: str) -> str:
    """Callback URL registered with Google for this deployment."""
    return f"http://{base_url}/auth/gg/redirect"


def build_authorize_url(
    *,
    redirect_uri: str,
    state: str,
    client_id: str = GOOGLE_CLIENT_ID,
    scope: str = GOOGLE_SCOPE,
    endpoint: str = GOOGLE_AUTH_ENDPOINT,
) -> str:
    params = {
        "client_id": client_id,
        "response_type": "code",
        "redirect_uri": redirect_uri,
        "state": state,
        "scope": scope,
    }
    return f"{endpoint}?{urlencode(params)}"


def exchange_code(code: str, redirect_uri: str) -> TokenResponse:
    """
    Exchange an authorization code for access and ID tokens (single attempt, no retry).
    Raises TokenExchangeError on transport failure, non-200 status, or a response without tokens.
    """
    try:
        r = httpx.post(
            GOOGLE_TOKEN_ENDPOINT,
            data={
                "code": code,
                "client_id": GOOGLE_CLIENT_ID,
                "client_secret": GOOGLE_CLIENT_SECRET,
                "redirect_uri": redirect_uri,
                "grant_type": "authorization_code",
            },
            headers={"Accept": "application/json"},
            timeout=HTTP_TIMEOUT,
        )
    except httpx.HTTPError as e:
        raise TokenExchangeError(f"Token endpoint unreachable: {e}") from e

    try:
        data = r.json()
    except ValueError:
        data = {}
    if not isinstance(data, dict):
        raise TokenExchangeError(f"Token exchange failed: unexpected response body (HTTP {r.status_code})")

    if r.status_code != 200:
        err_desc = data.get("error_description") or data.get("error") or f"HTTP {r.status_code}"
        raise TokenExchangeError(f"Token exchange failed: {err_desc}")

    access_token = data.get("access_token")
    id_token = data.get("id_token")
    if not access_token or not id_token:
        raise TokenExchangeError("Token exchange failed: response missing access_token or id_token")

    return TokenResponse(
        access_token=access_token,
        id_token=id_token,
        expires_in=data.get("expires_in", 0),
        scope=data.get("scope", ""),
    )
