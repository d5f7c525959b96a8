# travel_sync/config.py

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

HOST = os.environ.get("HOST", "0.0.0.0")
PORT = int(os.environ.get("PORT", "3004"))

DATA_DIR = Path(os.environ.get("TRAVEL_MAP_DATA_DIR", BASE_DIR / "data"))
DB_URL = os.environ.get("TRAVEL_MAP_DB_URL", f"sqlite:///{DATA_DIR / 'travel-map.db'}")

STATIC_DIR = Path(os.environ.get("TRAVEL_MAP_STATIC_DIR", BASE_DIR / "public"))
STATIC_MAX_AGE = 60 * 60  # seconds

MAX_BODY_BYTES = 1024 * 1024

RATE_LIMITS_ENABLED = os.environ.get("TRAVEL_MAP_RATE_LIMITS", "1") != "0"
API_RATE_LIMIT = "100 per 15 minutes"
SYNC_RATE_LIMIT = "30 per minute"

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
