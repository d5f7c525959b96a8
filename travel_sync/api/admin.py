# travel_sync/api/admin.py

from fastapi import APIRouter, Depends, HTTPException

from travel_sync.api.deps import get_store
from travel_sync.db.store import SyncStore
from travel_sync.errors import StoreError
from travel_sync.models.sync import StatsOut

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.get("/stats", response_model=StatsOut)
def stats(store: SyncStore = Depends(get_store)) -> StatsOut:
    try:
        user_count = store.count()
    except StoreError:
        raise HTTPException(status_code=500, detail="Database error")

    return StatsOut(user_count=user_count)
