"""User directory loaded from a CSV file."""

import csv
import logging
from dataclasses import dataclass
from pathlib import Path

from lunch_picker.services.users import UserDirectory

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CsvUserDirectory(UserDirectory):
    """Usernames read once from a single-column CSV with a header row."""

    usernames: tuple[str, ...]

    @classmethod
    def from_path(cls, path: str | Path) -> "CsvUserDirectory":
        """Load usernames, skipping the header and blank rows."""
        usernames: list[str] = []
        with Path(path).open(newline="", encoding="utf-8") as handle:
            reader = csv.reader(handle)
            next(reader, None)
            for row in reader:
                if not row:
                    continue
                username = row[0].strip()
                if username and username not in usernames:
                    usernames.append(username)
        _logger.info("Loaded %s users from %s", len(usernames), path)
        return cls(tuple(usernames))

    def exists(self, username: str) -> bool:
        return username in self.usernames

    def list_users(self) -> list[str]:
        return list(self.usernames)
