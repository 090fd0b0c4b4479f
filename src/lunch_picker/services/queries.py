"""Read-only session queries."""

from dataclasses import dataclass

from lunch_picker.domain.sessions import LunchSession
from lunch_picker.services.store import SessionStore


@dataclass
class SessionQueryService:
    """Snapshot lookups used by polling clients."""

    store: SessionStore

    def get(self, session_id: str) -> LunchSession:
        """Return the latest committed snapshot of a session."""
        return self.store.get(session_id)
