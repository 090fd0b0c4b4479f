"""Supabase-backed session store."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, TypeVar

from supabase import Client

from lunch_picker.domain.errors import ConcurrentModification, SessionNotFound
from lunch_picker.domain.sessions import (
    LunchSession,
    RestaurantChoice,
    SessionState,
    SessionStatus,
)
from lunch_picker.services.identifiers import IdentifierGenerator, UuidIdentifierGenerator
from lunch_picker.services.store import SessionStore, utc_now

T = TypeVar("T")

_logger = logging.getLogger(__name__)

_COLUMNS = "id, created_by, status, chosen_restaurant, created_at, version, restaurants"


@dataclass
class SupabaseSessionStore(SessionStore):
    """Supabase implementation of the session store.

    Exclusive access is an optimistic compare-and-swap on the ``version``
    column: a mutation is re-applied to a fresh read when another writer
    committed first, so ``fn`` must only touch the state it is given.
    """

    client: Client
    table: str = "lunch_sessions"
    max_attempts: int = 5
    identifiers: IdentifierGenerator = field(default_factory=UuidIdentifierGenerator)
    clock: Callable[[], datetime] = utc_now

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError(
                f"max_attempts must be at least 1, got {self.max_attempts}"
            )

    def create(self, created_by: str) -> LunchSession:
        """Insert an open session row and return it."""
        response = (
            self.client.table(self.table)
            .insert(
                {
                    "id": self.identifiers.new_session_id(),
                    "created_by": created_by,
                    "status": SessionStatus.OPEN.value,
                    "chosen_restaurant": None,
                    "created_at": self.clock().isoformat(),
                    "version": 0,
                    "restaurants": [],
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create session")
        session = _to_session(response.data[0])
        _logger.info("Session created: id=%s created_by=%s", session.id, created_by)
        return session

    def get(self, session_id: str) -> LunchSession:
        """Return a session by id."""
        return _to_session(self._fetch_row(session_id))

    def with_session(self, session_id: str, fn: Callable[[SessionState], T]) -> T:
        """Apply ``fn`` and write back only if nobody committed in between."""
        for attempt in range(1, self.max_attempts + 1):
            row = self._fetch_row(session_id)
            current = _to_session(row)
            state = SessionState.from_snapshot(current)
            result = fn(state)
            updated = state.snapshot()
            if updated == current:
                return result
            response = (
                self.client.table(self.table)
                .update(
                    {
                        "status": updated.status.value,
                        "chosen_restaurant": updated.chosen_restaurant,
                        "restaurants": [_choice_row(c) for c in updated.restaurants],
                        "version": row["version"] + 1,
                    }
                )
                .eq("id", session_id)
                .eq("version", row["version"])
                .execute()
            )
            if response.data:
                return result
            _logger.warning(
                "Concurrent modification of session %s (attempt %s/%s)",
                session_id,
                attempt,
                self.max_attempts,
            )
        raise ConcurrentModification(session_id, self.max_attempts)

    def _fetch_row(self, session_id: str) -> dict[str, Any]:
        response = (
            self.client.table(self.table)
            .select(_COLUMNS)
            .eq("id", session_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            raise SessionNotFound(session_id)
        return response.data[0]


def _choice_row(choice: RestaurantChoice) -> dict[str, object]:
    return {
        "id": choice.id,
        "restaurant": choice.restaurant,
        "submitted_by": choice.submitted_by,
    }


def _to_session(row: dict[str, Any]) -> LunchSession:
    return LunchSession(
        id=row["id"],
        created_by=row["created_by"],
        status=SessionStatus(row["status"]),
        chosen_restaurant=row.get("chosen_restaurant"),
        created_at=datetime.fromisoformat(row["created_at"]),
        restaurants=tuple(
            RestaurantChoice(
                id=int(item["id"]),
                restaurant=item["restaurant"],
                submitted_by=item["submitted_by"],
            )
            for item in row.get("restaurants") or []
        ),
    )
