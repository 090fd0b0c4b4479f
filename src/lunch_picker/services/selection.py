"""Random restaurant selection that closes a session."""

import logging
import random
from dataclasses import dataclass, field

from lunch_picker.domain.errors import NoCandidates, PickNotAllowed
from lunch_picker.domain.sessions import PickPolicy, SessionState
from lunch_picker.services.store import SessionStore
from lunch_picker.services.validation import require_text

_logger = logging.getLogger(__name__)


@dataclass
class RandomSelector:
    """Closes a session with a uniformly random winner."""

    store: SessionStore
    rng: random.Random = field(default_factory=random.Random)
    policy: PickPolicy = PickPolicy.ANY

    def pick_and_close(self, session_id: str, requested_by: str) -> str:
        """Pick a winner and close the session, or return the existing winner.

        Every submission is an equally likely outcome, so a name submitted
        twice is twice as likely to win. Picking an already closed session is
        not an error: all racing callers see the same winner.
        """
        require_text("requested_by", requested_by, "User name is required")

        def close(state: SessionState) -> tuple[str, bool]:
            if not state.is_open:
                if state.chosen_restaurant is None:
                    raise RuntimeError(f"Closed session {state.id} has no winner")
                return state.chosen_restaurant, False
            if not state.restaurants:
                raise NoCandidates(state.id)
            first_submitter = state.first_submitter or ""
            if (
                self.policy is PickPolicy.FIRST_SUBMITTER
                and requested_by != first_submitter
            ):
                raise PickNotAllowed(state.id, requested_by, first_submitter)
            winner = state.restaurants[self.rng.randrange(len(state.restaurants))]
            state.close(winner)
            return winner.restaurant, True

        chosen, transitioned = self.store.with_session(session_id, close)
        if transitioned:
            _logger.info(
                "Session closed: id=%s chosen=%s by=%s",
                session_id,
                chosen,
                requested_by,
            )
        else:
            _logger.info(
                "Session already closed, returning existing choice: id=%s chosen=%s",
                session_id,
                chosen,
            )
        return chosen
