"""Application service exposing the lunch session operations."""

from dataclasses import dataclass

from lunch_picker.domain.errors import UnknownUser
from lunch_picker.domain.sessions import LunchSession, RestaurantChoice
from lunch_picker.services.queries import SessionQueryService
from lunch_picker.services.selection import RandomSelector
from lunch_picker.services.store import SessionStore
from lunch_picker.services.submissions import SubmissionCoordinator
from lunch_picker.services.users import UserDirectory
from lunch_picker.services.validation import require_text


@dataclass
class LunchSessionService:
    """Entry point for a transport layer; holds no per-call state."""

    store: SessionStore
    queries: SessionQueryService
    submissions: SubmissionCoordinator
    selector: RandomSelector
    user_directory: UserDirectory | None = None

    def create_session(self, username: str) -> LunchSession:
        """Create an open session owned by ``username``.

        When a user directory is configured, only its users may create
        sessions. Anyone may submit or pick.
        """
        require_text("created_by", username, "User name is required")
        if self.user_directory is not None and not self.user_directory.exists(
            username
        ):
            raise UnknownUser(username)
        return self.store.create(username)

    def get_session(self, session_id: str) -> LunchSession:
        return self.queries.get(session_id)

    def submit_restaurant(
        self, session_id: str, restaurant: str, username: str
    ) -> RestaurantChoice:
        return self.submissions.submit(session_id, restaurant, username)

    def pick_random(self, session_id: str, username: str) -> str:
        return self.selector.pick_and_close(session_id, username)

    def list_users(self) -> list[str]:
        """Return the configured users, or nothing without a directory."""
        if self.user_directory is None:
            return []
        return self.user_directory.list_users()
