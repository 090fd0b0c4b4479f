"""Restaurant submission handling."""

import logging
from dataclasses import dataclass

from lunch_picker.domain.sessions import RestaurantChoice, SessionState
from lunch_picker.services.identifiers import IdentifierGenerator
from lunch_picker.services.store import SessionStore
from lunch_picker.services.validation import require_text

_logger = logging.getLogger(__name__)


@dataclass
class SubmissionCoordinator:
    """Validates restaurant choices and appends them to open sessions."""

    store: SessionStore
    identifiers: IdentifierGenerator

    def submit(
        self, session_id: str, restaurant: str, submitted_by: str
    ) -> RestaurantChoice:
        """Append a choice to an open session.

        The closed check and the append happen in the same exclusive section,
        so a submission can never land after a pick has closed the session.
        Duplicate names are accepted as separate choices.
        """
        name = require_text("restaurant", restaurant, "Restaurant name cannot be empty")
        require_text("submitted_by", submitted_by, "User name is required")

        def append(state: SessionState) -> RestaurantChoice:
            return state.append_choice(
                self.identifiers.next_choice_id(state), name, submitted_by
            )

        choice = self.store.with_session(session_id, append)
        _logger.info(
            "Restaurant submitted: session=%s choice=%s restaurant=%s by=%s",
            session_id,
            choice.id,
            choice.restaurant,
            choice.submitted_by,
        )
        return choice

