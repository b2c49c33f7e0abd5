"""
Server-side session state, keyed by session id.
SessionStore is the seam for swapping the backing store (memory, cache, database);
InMemorySessionStore is lab use only and is lost on restart.
"""
import dataclasses
import threading
from dataclasses import dataclass
from typing import Protocol

from webid_demo.federation import AwsConfig


@dataclass
class Session:
    is_authenticated: bool = False
    google_auth_state: str | None = None
    google_access_token: str | None = None
    google_id_token: str | None = None
    aws_config: AwsConfig | None = None

    def is_empty(self) -> bool:
        return self == Session()


class SessionStore(Protocol):
    def get(self, session_id: str) -> Session | None: ...

    def set(self, session_id: str, session: Session) -> None: ...

    def delete(self, session_id: str) -> None: ...


class InMemorySessionStore:
    """
    Process-local store. Returns copies so a request only publishes its changes
    when the session middleware writes the session back.
    """

    def __init__(self) -> None:
        self._sessions: dict[str, Session] = {}
        self._lock = threading.Lock()

    def get(self, session_id: str) -> Session | None:
        with self._lock:
            session = self._sessions.get(session_id)
            return dataclasses.replace(session) if session is not None else None

    def set(self, session_id: str, session: Session) -> None:
        with self._lock:
            self._sessions[session_id] = dataclasses.replace(session)

    def delete(self, session_id: str) -> None:
        with self._lock:
            self._sessions.pop(session_id, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
