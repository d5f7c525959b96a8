# scripts/init_db.py
"""
Create the users table in the configured database.

Existing rows are kept; the table is only created when missing.

Usage:
    python -m scripts.init_db [sqlite:///path/to/travel-map.db]
"""

import logging
import sys

from travel_sync.config import DB_URL
from travel_sync.db.store import SyncStore

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
)
logger = logging.getLogger(__name__)


def main(db_url: str = DB_URL):
    store = SyncStore.open(db_url)
    try:
        logger.info("DB schema ready (%s users stored).", store.count())
    finally:
        store.close()


if __name__ == "__main__":
    main(sys.argv[1] if len(sys.argv) > 1 else DB_URL)
