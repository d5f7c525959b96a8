# travel_sync/models/sync.py

import json
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator


class UserRecord(BaseModel):
    user_id: str
    paris: Optional[Any] = None
    london: Optional[Any] = None
    updated_at: Optional[str] = None


class SyncPayload(BaseModel):
    """Body of POST /api/sync/{user_id}. Both cities are opaque JSON."""

    paris: Optional[Any] = None
    london: Optional[Any] = None

    @field_validator("paris", "london")
    @classmethod
    def strict_json(cls, value: Any) -> Any:
        # Python's parser lets NaN and Infinity through; they are not JSON
        if value is not None:
            json.dumps(value, allow_nan=False)
        return value


class SyncData(BaseModel):
    paris: Optional[Any] = None
    london: Optional[Any] = None
    updated_at: Optional[str] = Field(default=None, alias="updatedAt")

    class Config:
        populate_by_name = True


class SyncReadResponse(BaseModel):
    success: bool = True
    data: Optional[SyncData] = None


class SyncWriteResponse(BaseModel):
    success: bool = True
    updated_at: str = Field(alias="updatedAt")

    class Config:
        populate_by_name = True


class StatsOut(BaseModel):
    user_count: int = Field(alias="userCount")

    class Config:
        populate_by_name = True
