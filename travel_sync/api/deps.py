# travel_sync/api/deps.py

from fastapi import Request

from travel_sync.db.store import SyncStore
from travel_sync.identifiers import normalize_user_id


def get_store(request: Request) -> SyncStore:
    return request.app.state.store


def normalized_user_id(user_id: str) -> str:
    """Path parameter dependency; raises InvalidUserIdError before any store access."""
    return normalize_user_id(user_id)
