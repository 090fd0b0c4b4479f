"""Errors raised by the session coordination core."""


class LunchPickerError(Exception):
    """Base class for all lunch picker errors."""


class SessionNotFound(LunchPickerError):
    """No session exists with the given id."""

    def __init__(self, session_id: str) -> None:
        self.session_id = session_id
        super().__init__(f"Session {session_id} not found")


class SessionClosed(LunchPickerError):
    """The session is closed and accepts no further submissions."""

    def __init__(self, session_id: str) -> None:
        self.session_id = session_id
        super().__init__(
            f"Session {session_id} is closed. No further submissions allowed."
        )


class ValidationFailed(LunchPickerError):
    """An input value was rejected before touching the store."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(message)


class NoCandidates(LunchPickerError):
    """A pick was requested before any restaurant was submitted."""

    def __init__(self, session_id: str) -> None:
        self.session_id = session_id
        super().__init__(f"No restaurants have been submitted to {session_id} yet")


class PickNotAllowed(LunchPickerError):
    """The requester may not close this session under the active pick policy."""

    def __init__(self, session_id: str, username: str, first_submitter: str) -> None:
        self.session_id = session_id
        self.username = username
        self.first_submitter = first_submitter
        super().__init__(
            f"Only the first submitter ({first_submitter}) can pick for "
            f"session {session_id}"
        )


class UnknownUser(LunchPickerError):
    """The username is not present in the user directory."""

    def __init__(self, username: str) -> None:
        self.username = username
        super().__init__(f"User '{username}' is not authorized to create sessions")


class ConcurrentModification(LunchPickerError):
    """The store could not commit a mutation after repeated conflicts."""

    def __init__(self, session_id: str, attempts: int) -> None:
        self.session_id = session_id
        self.attempts = attempts
        super().__init__(
            f"Session {session_id} was modified concurrently "
            f"{attempts} times in a row"
        )
