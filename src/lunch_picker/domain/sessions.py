"""Domain models for lunch decision sessions."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum

from lunch_picker.domain.errors import SessionClosed


class SessionStatus(StrEnum):
    """Lifecycle status of a session. CLOSED is terminal."""

    OPEN = "OPEN"
    CLOSED = "CLOSED"


class PickPolicy(StrEnum):
    """Who may close an open session."""

    ANY = "any"
    FIRST_SUBMITTER = "first_submitter"


@dataclass(frozen=True)
class RestaurantChoice:
    """A single restaurant submission within a session."""

    id: int
    restaurant: str
    submitted_by: str


@dataclass(frozen=True)
class LunchSession:
    """Read-only snapshot of a session."""

    id: str
    created_by: str
    status: SessionStatus
    chosen_restaurant: str | None
    created_at: datetime
    restaurants: tuple[RestaurantChoice, ...] = ()


@dataclass
class SessionState:
    """Mutable working copy of a session, only handed out by a store.

    Mutations go through ``append_choice`` and ``close`` so the session
    invariants hold for every state a store can commit.
    """

    id: str
    created_by: str
    created_at: datetime
    status: SessionStatus = SessionStatus.OPEN
    chosen_restaurant: str | None = None
    restaurants: list[RestaurantChoice] = field(default_factory=list)

    @classmethod
    def from_snapshot(cls, session: LunchSession) -> "SessionState":
        """Build a working copy from a committed snapshot."""
        return cls(
            id=session.id,
            created_by=session.created_by,
            created_at=session.created_at,
            status=session.status,
            chosen_restaurant=session.chosen_restaurant,
            restaurants=list(session.restaurants),
        )

    @property
    def is_open(self) -> bool:
        return self.status is SessionStatus.OPEN

    @property
    def first_submitter(self) -> str | None:
        return self.restaurants[0].submitted_by if self.restaurants else None

    @property
    def last_choice_id(self) -> int:
        return self.restaurants[-1].id if self.restaurants else 0

    def append_choice(
        self, choice_id: int, restaurant: str, submitted_by: str
    ) -> RestaurantChoice:
        """Append a submission; the session must be open."""
        if not self.is_open:
            raise SessionClosed(self.id)
        if choice_id <= self.last_choice_id:
            raise ValueError(
                f"Choice id {choice_id} must be greater than {self.last_choice_id}"
            )
        choice = RestaurantChoice(
            id=choice_id, restaurant=restaurant, submitted_by=submitted_by
        )
        self.restaurants.append(choice)
        return choice

    def close(self, winner: RestaurantChoice) -> None:
        """Close the session with one of its own choices as the winner."""
        if not self.is_open:
            raise SessionClosed(self.id)
        if winner not in self.restaurants:
            raise ValueError(f"Choice {winner.id} does not belong to session {self.id}")
        self.chosen_restaurant = winner.restaurant
        self.status = SessionStatus.CLOSED

    def snapshot(self) -> LunchSession:
        """Return an immutable copy of the current state."""
        return LunchSession(
            id=self.id,
            created_by=self.created_by,
            status=self.status,
            chosen_restaurant=self.chosen_restaurant,
            created_at=self.created_at,
            restaurants=tuple(self.restaurants),
        )
