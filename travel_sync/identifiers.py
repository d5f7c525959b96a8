# travel_sync/identifiers.py

import re

from travel_sync.errors import InvalidUserIdError

MIN_LENGTH = 3
MAX_LENGTH = 30

_DISALLOWED = re.compile(r"[^a-z0-9_-]")


def normalize_user_id(raw: str) -> str:
    """
    Lowercase the identifier, drop everything outside [a-z0-9_-] and
    check the remaining length. Raises InvalidUserIdError when it is out of range.
    """
    user_id = _DISALLOWED.sub("", raw.lower())
    if not MIN_LENGTH <= len(user_id) <= MAX_LENGTH:
        raise InvalidUserIdError(raw)
    return user_id
