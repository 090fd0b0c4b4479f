"""Identifier generation for sessions and restaurant choices."""

from dataclasses import dataclass
from typing import Protocol
from uuid import uuid4

from lunch_picker.domain.sessions import SessionState


class IdentifierGenerator(Protocol):
    """Source of session ids and per-session choice ids."""

    def new_session_id(self) -> str:
        """Return a session id that has never been issued before."""

    def next_choice_id(self, state: SessionState) -> int:
        """Return the id for the next choice appended to a session."""


@dataclass
class UuidIdentifierGenerator(IdentifierGenerator):
    """Random UUID session ids and 1-based sequential choice ids."""

    def new_session_id(self) -> str:
        return str(uuid4())

    def next_choice_id(self, state: SessionState) -> int:
        return state.last_choice_id + 1
