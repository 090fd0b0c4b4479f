"""User directory interface."""

from typing import Protocol


class UserDirectory(Protocol):
    """Registry of known usernames."""

    def exists(self, username: str) -> bool:
        """Return whether a username is known. Comparison is case-sensitive."""

    def list_users(self) -> list[str]:
        """Return all known usernames in registry order."""
