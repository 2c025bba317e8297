"""In-memory conversation sessions, keyed by user identity.

Constructed at process start and cleared at shutdown (or used as a context
manager). Sessions are independent; the store is only touched from the
event loop, so no locking is needed.
"""

from __future__ import annotations

from typing import Iterator

from core.domain.models import Session


class SessionStore:
    """At most one session per user id."""

    def __init__(self) -> None:
        self._sessions: dict[str, Session] = {}

    def get(self, user_id: str) -> Session | None:
        return self._sessions.get(user_id)

    def put(self, user_id: str, session: Session) -> None:
        self._sessions[user_id] = session

    def delete(self, user_id: str) -> bool:
        """Remove the user's session; return whether one existed."""

        return self._sessions.pop(user_id, None) is not None

    def clear(self) -> None:
        self._sessions.clear()

    def __contains__(self, user_id: object) -> bool:
        return user_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._sessions))

    def __enter__(self) -> "SessionStore":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.clear()
