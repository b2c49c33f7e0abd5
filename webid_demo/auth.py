"""
Google login routes (prefix /auth).
GET /gg/flow starts the authorization-code flow; GET /gg/redirect is the callback Google returns to.
"""
import logging

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import RedirectResponse

from webid_demo import config
from webid_demo.id_token import peek_claims, verify_id_token
from webid_demo.oauth import build_authorize_url, exchange_code, generate_state, redirect_uri_for
from webid_demo.session_store import Session
from webid_demo.sessions import get_session

logger = logging.getLogger(__name__)
router = APIRouter()


def _redirect_uri(request: Request) -> str:
    return redirect_uri_for(request.app.state.base_url)


@router.get("/gg/flow")
def start_flow(request: Request, session: Session = Depends(get_session)):
    """
    Redirect to Google's authorization endpoint.
    Handled server side so the state token can be kept in the session for the callback.
    """
    state = generate_state()
    session.google_auth_state = state
    url = build_authorize_url(redirect_uri=_redirect_uri(request), state=state)
    return RedirectResponse(url=url, status_code=302)


@router.get("/gg/redirect")
def callback(
    request: Request,
    code: str | None = None,
    state: str | None = None,
    session: Session = Depends(get_session),
):
    """
    Validate state, exchange the code for tokens, mark the session authenticated.
    A missing or mismatched state gets an empty 200 and leaves the session as it was.
    """
    if not session.google_auth_state or session.google_auth_state != state:
        logger.warning("Invalid or missing state token")
        return Response(status_code=200)

    # single use
    session.google_auth_state = None

    logger.info("Incoming google oauth redirect")
    tokens = exchange_code(code or "", _redirect_uri(request))

    if config.GOOGLE_VERIFY_ID_TOKEN:
        claims = verify_id_token(tokens.id_token)
    else:
        claims = peek_claims(tokens.id_token)
    logger.info("Google login ok (sub=%s, email=%s)", claims.get("sub"), claims.get("email"))

    session.is_authenticated = True
    session.google_access_token = tokens.access_token
    session.google_id_token = tokens.id_token
    # a new identity must not reuse credentials federated for a previous one
    session.aws_config = None
    return RedirectResponse(url="/", status_code=302)
