# tests/conftest.py

import pytest
from fastapi.testclient import TestClient

from travel_sync.db.store import SyncStore
from travel_sync.limits import limiter
from travel_sync.main import create_app


@pytest.fixture(autouse=True)
def reset_rate_limits():
    """The limiter is process-wide; give every test a clean window."""
    limiter.reset()
    yield
    limiter.reset()


@pytest.fixture
def db_url(tmp_path):
    return f"sqlite:///{tmp_path / 'data' / 'travel-map.db'}"


@pytest.fixture
def static_dir(tmp_path):
    public = tmp_path / "public"
    public.mkdir()
    (public / "index.html").write_text("<!DOCTYPE html><title>Europe Travel Map</title>")
    (public / "app.js").write_text("console.log('map');")
    return public


@pytest.fixture
def app(db_url, static_dir):
    return create_app(db_url=db_url, static_dir=static_dir)


@pytest.fixture
def client(app):
    # Entering the context runs the lifespan, which opens the store
    with TestClient(app) as client:
        yield client


@pytest.fixture
def store(db_url):
    store = SyncStore.open(db_url)
    yield store
    store.close()
