"""
Cookie-backed session middleware.
The cookie carries only a signed session id; state lives in a SessionStore.
Like express-session with saveUninitialized=false, no cookie is issued until the session holds data.
"""
import dataclasses
import logging
import secrets

from fastapi import Request
from itsdangerous import BadSignature, URLSafeSerializer
from starlette.middleware.base import BaseHTTPMiddleware

from webid_demo.config import SESSION_COOKIE_NAME
from webid_demo.session_store import Session, SessionStore

logger = logging.getLogger(__name__)

_SALT = "webid-session"


def new_session_id() -> str:
    return secrets.token_urlsafe(32)


def sign_session_id(session_id: str, secret: str) -> str:
    """Cookie value for a session id."""
    return URLSafeSerializer(secret, salt=_SALT).dumps(session_id)


class SessionMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, store: SessionStore, secret: str, cookie_name: str = SESSION_COOKIE_NAME):
        super().__init__(app)
        self.store = store
        self.secret = secret
        self.cookie_name = cookie_name
        self.serializer = URLSafeSerializer(secret, salt=_SALT)

    def _session_id_from_cookie(self, cookie: str | None) -> str | None:
        if not cookie:
            return None
        try:
            return self.serializer.loads(cookie)
        except BadSignature:
            logger.warning("Ignoring session cookie with bad signature")
            return None

    async def dispatch(self, request: Request, call_next):
        session_id = self._session_id_from_cookie(request.cookies.get(self.cookie_name))
        session = self.store.get(session_id) if session_id else None
        if session is None:
            session_id = None
            session = Session()
        before = dataclasses.replace(session)
        request.state.session = session

        # saved even when the handler raises
        try:
            response = await call_next(request)
        finally:
            new_cookie = self._save(session_id, session, before)

        if new_cookie:
            response.set_cookie(
                self.cookie_name,
                sign_session_id(new_cookie, self.secret),
                httponly=True,
                samesite="lax",
                path="/",
            )
        return response

    def _save(self, session_id: str | None, session: Session, before: Session) -> str | None:
        """Persist a changed session. Returns the id when a cookie must be (re)issued."""
        if session == before:
            return None
        if session_id is None:
            if session.is_empty():
                return None
            session_id = new_session_id()
        self.store.set(session_id, session)
        return session_id


def get_session(request: Request) -> Session:
    """Dependency: the current request's session (attached by SessionMiddleware)."""
    return request.state.session
