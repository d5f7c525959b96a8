# travel_sync/db/engine.py

from pathlib import Path

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url

from travel_sync.config import DB_URL


def _enable_wal(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.close()


def get_engine(db_url: str = DB_URL) -> Engine:
    url = make_url(db_url)
    connect_args = {}

    if url.get_backend_name() == "sqlite":
        # Sync endpoints run in a threadpool, so connections hop threads
        connect_args["check_same_thread"] = False
        if url.database and url.database != ":memory:":
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)

    engine = create_engine(db_url, future=True, connect_args=connect_args)

    if url.get_backend_name() == "sqlite":
        event.listen(engine, "connect", _enable_wal)

    return engine
