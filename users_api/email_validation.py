"""Email format check applied before a user is created."""

import re

EMAIL_PATTERN = re.compile(
    r"^[A-Za-z0-9._%+-]+@"
    r"[A-Za-z0-9]([A-Za-z0-9-]*[A-Za-z0-9])?"
    r"(\.[A-Za-z0-9]([A-Za-z0-9-]*[A-Za-z0-9])?)*"
    r"\.[A-Za-z]{2,}$"
)


def is_valid_email(email: str) -> bool:
    """Return True if ``email`` looks like ``local@domain.tld``."""
    return EMAIL_PATTERN.fullmatch(email) is not None
