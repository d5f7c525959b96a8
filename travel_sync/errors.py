# travel_sync/errors.py


class SyncError(Exception):
    """Base class for errors raised by the sync service."""


class InvalidUserIdError(SyncError, ValueError):
    """The user identifier is empty or out of range after normalization."""

    def __init__(self, raw: str):
        super().__init__(f"invalid user id: {raw!r}")
        self.raw = raw


class StoreError(SyncError):
    """
    The persistence layer failed on read or write.

    The message is meant for server logs only; clients get a generic error.
    """
