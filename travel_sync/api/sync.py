# travel_sync/api/sync.py

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from travel_sync.api.deps import get_store, normalized_user_id
from travel_sync.db.store import SyncStore
from travel_sync.errors import StoreError
from travel_sync.models.sync import (
    SyncData,
    SyncPayload,
    SyncReadResponse,
    SyncWriteResponse,
)

router = APIRouter(prefix="/api/sync", tags=["sync"])


@router.get("/{user_id}", response_model=SyncReadResponse)
def read_sync(
    user_id: str = Depends(normalized_user_id),
    store: SyncStore = Depends(get_store),
) -> SyncReadResponse:
    """
    Return the stored itineraries for user_id.

    A user that has never synced gets data=null rather than an error.
    """
    try:
        record = store.get(user_id)
    except StoreError:
        raise HTTPException(status_code=500, detail="Database error")

    if record is None:
        return SyncReadResponse(data=None)

    return SyncReadResponse(
        data=SyncData(
            paris=record.paris,
            london=record.london,
            updated_at=record.updated_at,
        )
    )


@router.post("/{user_id}", response_model=SyncWriteResponse)
def write_sync(
    payload: Optional[SyncPayload] = None,
    user_id: str = Depends(normalized_user_id),
    store: SyncStore = Depends(get_store),
) -> SyncWriteResponse:
    """
    Replace both itineraries for user_id.

    The write is a full overwrite: a city missing from the body is cleared.
    """
    if payload is None:
        payload = SyncPayload()

    try:
        updated_at = store.put(user_id, paris=payload.paris, london=payload.london)
    except StoreError:
        raise HTTPException(status_code=500, detail="Failed to save data")

    return SyncWriteResponse(updated_at=updated_at)
