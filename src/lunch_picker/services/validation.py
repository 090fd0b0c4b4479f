"""Input checks shared by the mutating services."""

from lunch_picker.domain.errors import ValidationFailed


def require_text(field: str, value: str | None, message: str) -> str:
    """Return ``value`` stripped, or raise ValidationFailed if it is blank.

    Usernames are opaque, so callers only use this to reject blank ones and
    keep the value they were given.
    """
    cleaned = (value or "").strip()
    if not cleaned:
        raise ValidationFailed(field, message)
    return cleaned
