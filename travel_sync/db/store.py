# travel_sync/db/store.py

import json
import logging
from typing import Any, Optional

from sqlalchemy import func, select
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from travel_sync.db.engine import get_engine
from travel_sync.db.schema import metadata, users
from travel_sync.errors import StoreError
from travel_sync.models.sync import UserRecord

logger = logging.getLogger(__name__)


# UTC, milliseconds, Z suffix: 2026-10-17T09:30:00.123Z
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%fZ"


def utc_now_sql():
    """SQLite evaluates this when the statement runs, under the write lock."""
    return func.strftime(TIMESTAMP_FORMAT, "now")


def _dump(value: Any) -> Optional[str]:
    if value is None:
        return None
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"), allow_nan=False)


def _load(raw: Optional[str]) -> Any:
    if not raw:
        return None
    return json.loads(raw)


class SyncStore:
    """
    Keyed table of per-user itinerary documents.

    One instance owns one engine for the life of the process; every call
    runs in its own short transaction. User ids must be normalized by the
    caller before they reach the store.
    """

    def __init__(self, engine: Engine):
        self.engine = engine

    @classmethod
    def open(cls, db_url: str) -> "SyncStore":
        engine = get_engine(db_url)
        try:
            metadata.create_all(engine)
        except SQLAlchemyError as e:
            engine.dispose()
            raise StoreError(f"could not initialise schema: {e}") from e
        return cls(engine)

    def close(self) -> None:
        self.engine.dispose()

    def get(self, user_id: str) -> Optional[UserRecord]:
        stmt = select(
            users.c.user_id,
            users.c.paris_data,
            users.c.london_data,
            users.c.updated_at,
        ).where(users.c.user_id == user_id)

        try:
            with self.engine.connect() as conn:
                row = conn.execute(stmt).mappings().first()

            if row is None:
                return None

            return UserRecord(
                user_id=row["user_id"],
                paris=_load(row["paris_data"]),
                london=_load(row["london_data"]),
                updated_at=row["updated_at"],
            )
        except (SQLAlchemyError, ValueError) as e:
            logger.exception("Database read error for user %s", user_id)
            raise StoreError(f"read failed for {user_id!r}: {e}") from e

    def put(self, user_id: str, paris: Any = None, london: Any = None) -> str:
        """
        Insert or fully replace the record for user_id.

        Both documents are overwritten; passing None clears a field.
        Returns the server-side timestamp stored with the write. It is taken
        inside the write transaction, so commit order and timestamp order agree.
        Raises ValueError for values that are not strict JSON (NaN, Infinity).
        """
        stmt = sqlite_insert(users).values(
            user_id=user_id,
            paris_data=_dump(paris),
            london_data=_dump(london),
            updated_at=utc_now_sql(),
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[users.c.user_id],
            set_={
                "paris_data": stmt.excluded.paris_data,
                "london_data": stmt.excluded.london_data,
                "updated_at": stmt.excluded.updated_at,
            },
        )

        try:
            with self.engine.begin() as conn:
                conn.execute(stmt)
                updated_at = conn.execute(
                    select(users.c.updated_at).where(users.c.user_id == user_id)
                ).scalar_one()
        except SQLAlchemyError as e:
            logger.exception("Database write error for user %s", user_id)
            raise StoreError(f"write failed for {user_id!r}: {e}") from e

        logger.info("Data saved for user: %s", user_id)
        return updated_at

    def count(self) -> int:
        stmt = select(func.count()).select_from(users)
        try:
            with self.engine.connect() as conn:
                return conn.execute(stmt).scalar_one()
        except SQLAlchemyError as e:
            logger.exception("Database error while counting users")
            raise StoreError(f"count failed: {e}") from e
