"""Session storage with per-session exclusive access."""

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol, TypeVar

from lunch_picker.domain.errors import SessionNotFound
from lunch_picker.domain.sessions import LunchSession, SessionState
from lunch_picker.services.identifiers import IdentifierGenerator, UuidIdentifierGenerator

T = TypeVar("T")

_logger = logging.getLogger(__name__)


class SessionStore(Protocol):
    """Registry of sessions and the only path for mutating them."""

    def create(self, created_by: str) -> LunchSession:
        """Register a new open session and return its snapshot."""

    def get(self, session_id: str) -> LunchSession:
        """Return a snapshot of a session or raise SessionNotFound."""

    def with_session(self, session_id: str, fn: Callable[[SessionState], T]) -> T:
        """Run ``fn`` with exclusive access to one session and commit its changes.

        Nothing is committed when ``fn`` raises.
        """


def utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class _Entry:
    lock: threading.Lock
    snapshot: LunchSession


@dataclass
class InMemorySessionStore(SessionStore):
    """Process-local store with one lock per session.

    Readers never take a session lock: they read the last committed
    snapshot, which is swapped in whole on commit.
    """

    identifiers: IdentifierGenerator = field(default_factory=UuidIdentifierGenerator)
    clock: Callable[[], datetime] = utc_now
    _entries: dict[str, _Entry] = field(default_factory=dict, init=False, repr=False)
    _registry_lock: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False
    )

    def create(self, created_by: str) -> LunchSession:
        """Register a new open session."""
        state = SessionState(
            id=self.identifiers.new_session_id(),
            created_by=created_by,
            created_at=self.clock(),
        )
        snapshot = state.snapshot()
        with self._registry_lock:
            if snapshot.id in self._entries:
                raise RuntimeError(f"Session id {snapshot.id} was issued twice")
            self._entries[snapshot.id] = _Entry(
                lock=threading.Lock(), snapshot=snapshot
            )
        _logger.info("Session created: id=%s created_by=%s", snapshot.id, created_by)
        return snapshot

    def get(self, session_id: str) -> LunchSession:
        """Return the last committed snapshot."""
        return self._entry(session_id).snapshot

    def with_session(self, session_id: str, fn: Callable[[SessionState], T]) -> T:
        """Apply ``fn`` to a working copy under the session lock."""
        entry = self._entry(session_id)
        with entry.lock:
            state = SessionState.from_snapshot(entry.snapshot)
            result = fn(state)
            entry.snapshot = state.snapshot()
        return result

    def _entry(self, session_id: str) -> _Entry:
        with self._registry_lock:
            entry = self._entries.get(session_id)
        if entry is None:
            raise SessionNotFound(session_id)
        return entry
