# travel_sync/__init__.py
"""
Package entrypoint for the FastAPI application.

This lets us run:
    uvicorn travel_sync:app --reload
or, with logging configured and the port taken from $PORT:
    python -m travel_sync
"""

from .main import app, create_app

__all__ = ["app", "create_app"]
