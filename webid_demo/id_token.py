"""
ID token inspection and (optional) verification against Google's JWKS.
By default the id_token is trusted as received over TLS from the token endpoint and only
its claims are read for logging; set GOOGLE_VERIFY_ID_TOKEN to check signature, aud, iss, exp.
"""
import logging

import jwt
from jwt import PyJWKClient

from webid_demo.config import GOOGLE_CLIENT_ID, GOOGLE_ISSUERS, GOOGLE_JWKS_URI
from webid_demo.errors import IdTokenError

logger = logging.getLogger(__name__)

# Google rotates its signing keys every few days
GOOGLE_JWKS_CACHE_SECONDS = 3600

_google_keys: PyJWKClient | None = None


def google_keys() -> PyJWKClient:
    """Lazily built client for Google's published certs (fetched on first verification)."""
    global _google_keys
    if _google_keys is None:
        _google_keys = PyJWKClient(GOOGLE_JWKS_URI, cache_jwk_set=True, lifespan=GOOGLE_JWKS_CACHE_SECONDS)
    return _google_keys


def peek_claims(id_token: str) -> dict:
    """Decode claims WITHOUT verifying the signature. Returns {} if the token is not a JWT."""
    try:
        return jwt.decode(id_token, options={"verify_signature": False})
    except jwt.PyJWTError as e:
        logger.warning("Could not decode id_token: %s", e)
        return {}


def verify_id_token(id_token: str, audience: str = GOOGLE_CLIENT_ID) -> dict:
    """
    Verify signature via JWKS and validate aud, iss, exp.
    Returns decoded claims. Raises IdTokenError on any failure.
    """
    try:
        signing_key = google_keys().get_signing_key_from_jwt(id_token)
        claims = jwt.decode(
            id_token,
            signing_key.key,
            algorithms=["RS256"],
            audience=audience,
            options={"verify_exp": True, "verify_aud": True},
        )
    except jwt.ExpiredSignatureError:
        raise IdTokenError("ID token expired")
    except jwt.InvalidAudienceError:
        raise IdTokenError("ID token has invalid audience")
    except jwt.PyJWTError as e:
        logger.debug("ID token verification failed: %s", e)
        raise IdTokenError("ID token verification failed")
    # Google issues both forms of iss
    if claims.get("iss") not in GOOGLE_ISSUERS:
        raise IdTokenError("ID token has invalid issuer")
    return claims
