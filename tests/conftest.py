"""Shared test fixtures."""

import random
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from itertools import count

import pytest

from lunch_picker.config import Settings
from lunch_picker.domain.sessions import PickPolicy, SessionState
from lunch_picker.services.identifiers import IdentifierGenerator
from lunch_picker.services.lunch import LunchSessionService
from lunch_picker.services.queries import SessionQueryService
from lunch_picker.services.selection import RandomSelector
from lunch_picker.services.store import InMemorySessionStore
from lunch_picker.services.submissions import SubmissionCoordinator

FIXED_NOW = datetime(2024, 5, 17, 12, 0, tzinfo=UTC)


@dataclass
class SequentialIdentifierGenerator(IdentifierGenerator):
    """Predictable session ids for tests."""

    prefix: str = "session"
    _counter: count = field(default_factory=lambda: count(1))

    def new_session_id(self) -> str:
        return f"{self.prefix}-{next(self._counter)}"

    def next_choice_id(self, state: SessionState) -> int:
        return state.last_choice_id + 1


@dataclass
class StaticUserDirectory:
    """User directory backed by a fixed list."""

    usernames: list[str] = field(default_factory=list)

    def exists(self, username: str) -> bool:
        return username in self.usernames

    def list_users(self) -> list[str]:
        return list(self.usernames)


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeQuery:
    """Query builder that filters and mutates the rows of a FakeTable."""

    table: "FakeTable"
    action: str = "select"
    payload: dict[str, object] | None = None
    filters: list[tuple[str, object]] = field(default_factory=list)
    row_limit: int | None = None

    def select(self, *_args) -> "FakeQuery":
        self.action = "select"
        return self

    def insert(self, payload) -> "FakeQuery":  # type: ignore[no-untyped-def]
        self.action = "insert"
        self.payload = payload
        return self

    def update(self, payload) -> "FakeQuery":  # type: ignore[no-untyped-def]
        self.action = "update"
        self.payload = payload
        return self

    def eq(self, column: str, value) -> "FakeQuery":  # type: ignore[no-untyped-def]
        self.filters.append((column, value))
        return self

    def limit(self, count_: int) -> "FakeQuery":
        self.row_limit = count_
        return self

    def execute(self) -> FakeResponse:
        if self.action == "insert":
            row = dict(self.payload or {})
            self.table.rows.append(row)
            return FakeResponse(data=[dict(row)])
        if self.action == "update":
            if self.table.before_update is not None:
                hook = self.table.before_update
                self.table.before_update = None
                hook(self.table)
            self.table.updates += 1
        matched = [
            row
            for row in self.table.rows
            if all(row.get(column) == value for column, value in self.filters)
        ]
        if self.row_limit is not None:
            matched = matched[: self.row_limit]
        if self.action == "update":
            for row in matched:
                row.update(self.payload or {})
        return FakeResponse(data=[dict(row) for row in matched])


@dataclass
class FakeTable:
    name: str
    rows: list[dict[str, object]] = field(default_factory=list)
    before_update: Callable[["FakeTable"], None] | None = None
    updates: int = 0


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeQuery:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return FakeQuery(table=self.tables[name])


@pytest.fixture
def settings() -> Settings:
    return Settings(store_backend="memory", random_seed=7)


@pytest.fixture
def identifiers() -> SequentialIdentifierGenerator:
    return SequentialIdentifierGenerator()


@pytest.fixture
def store(identifiers: SequentialIdentifierGenerator) -> InMemorySessionStore:
    return InMemorySessionStore(identifiers=identifiers, clock=lambda: FIXED_NOW)


@pytest.fixture
def coordinator(
    store: InMemorySessionStore, identifiers: SequentialIdentifierGenerator
) -> SubmissionCoordinator:
    return SubmissionCoordinator(store, identifiers)


@pytest.fixture
def selector(store: InMemorySessionStore) -> RandomSelector:
    return RandomSelector(store=store, rng=random.Random(1234))


@pytest.fixture
def lunch_service(
    store: InMemorySessionStore,
    coordinator: SubmissionCoordinator,
    selector: RandomSelector,
) -> LunchSessionService:
    return LunchSessionService(
        store=store,
        queries=SessionQueryService(store),
        submissions=coordinator,
        selector=selector,
    )


def build_service(
    policy: PickPolicy = PickPolicy.ANY,
    users: list[str] | None = None,
) -> LunchSessionService:
    """Build a fully in-memory service with optional policy and directory."""
    identifiers = SequentialIdentifierGenerator()
    store = InMemorySessionStore(identifiers=identifiers, clock=lambda: FIXED_NOW)
    return LunchSessionService(
        store=store,
        queries=SessionQueryService(store),
        submissions=SubmissionCoordinator(store, identifiers),
        selector=RandomSelector(store=store, rng=random.Random(99), policy=policy),
        user_directory=StaticUserDirectory(users) if users is not None else None,
    )
