# tests/test_api_app.py

from fastapi.testclient import TestClient

from travel_sync.errors import StoreError
from travel_sync.middleware import SECURITY_HEADERS


def test_stats_counts_distinct_users(client):
    assert client.get("/api/admin/stats").json() == {"userCount": 0}

    client.post("/api/sync/alice", json={"paris": {}})
    client.post("/api/sync/bob", json={"london": {}})
    client.post("/api/sync/ALICE", json={"london": {}})

    resp = client.get("/api/admin/stats")
    assert resp.status_code == 200
    assert resp.json() == {"userCount": 2}


def test_stats_store_error_does_not_leak_details(client, monkeypatch):
    def fail():
        raise StoreError("no such table: users")

    monkeypatch.setattr(client.app.state.store, "count", fail)

    resp = client.get("/api/admin/stats")
    assert resp.status_code == 500
    assert resp.json() == {"error": "Database error"}


def test_unmatched_route_returns_json_404(client):
    resp = client.get("/api/nothing/here")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Not found"}


def test_unsupported_method_returns_json_404(client):
    resp = client.delete("/api/sync/alice")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Not found"}


def test_index_page_is_served(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert "Europe Travel Map" in resp.text
    assert resp.headers["cache-control"] == "public, max-age=3600"


def test_static_assets_are_served_with_cache_header(client):
    resp = client.get("/app.js")
    assert resp.status_code == 200
    assert "console.log" in resp.text
    assert resp.headers["cache-control"] == "public, max-age=3600"
    assert "etag" in resp.headers


def test_missing_static_dir_still_serves_api(db_url, tmp_path):
    from travel_sync.main import create_app

    app = create_app(db_url=db_url, static_dir=tmp_path / "missing")
    with TestClient(app) as client:
        assert client.get("/").json() == {"error": "Not found"}
        assert client.get("/api/sync/alice").json() == {"success": True, "data": None}


def test_security_headers_on_every_response(client):
    for resp in (
        client.get("/api/sync/alice"),
        client.get("/api/sync/ab"),
        client.get("/missing"),
        client.get("/"),
    ):
        for name, value in SECURITY_HEADERS.items():
            assert resp.headers[name] == value
    assert "unpkg.com" in SECURITY_HEADERS["Content-Security-Policy"]


def test_sync_rate_limit_is_shared_across_get_and_post(client):
    for i in range(15):
        assert client.get("/api/sync/alice").status_code == 200
        assert client.post("/api/sync/alice", json={"paris": {"i": i}}).status_code == 200

    resp = client.get("/api/sync/alice")
    assert resp.status_code == 429
    assert resp.json() == {"error": "Too many sync requests."}

    # Separate budget for the admin endpoint
    assert client.get("/api/admin/stats").status_code == 200


def test_admin_rate_limit(client):
    for _ in range(100):
        assert client.get("/api/admin/stats").status_code == 200

    resp = client.get("/api/admin/stats")
    assert resp.status_code == 429
    assert resp.json() == {"error": "Too many requests, please try again later."}


def test_unhandled_exception_is_generic_500(app, monkeypatch):
    with TestClient(app, raise_server_exceptions=False) as client:
        def explode():
            raise RuntimeError("secret internals")

        monkeypatch.setattr(client.app.state.store, "count", explode)

        resp = client.get("/api/admin/stats")
        assert resp.status_code == 500
        assert resp.json() == {"error": "Internal server error"}
        assert "secret" not in resp.text
        for name, value in SECURITY_HEADERS.items():
            assert resp.headers[name] == value


def test_lifespan_closes_store(app):
    with TestClient(app) as client:
        store = client.app.state.store
        client.post("/api/sync/alice", json={"paris": {}})

    # Disposed pool has no checked-out connections left
    assert store.engine.pool.checkedout() == 0


def test_invalid_user_ids_spend_the_sync_budget(client):
    for _ in range(30):
        assert client.get("/api/sync/ab").status_code == 400

    resp = client.get("/api/sync/ab")
    assert resp.status_code == 429
    assert resp.json() == {"error": "Too many sync requests."}
    # Valid ids share the exhausted budget
    assert client.get("/api/sync/alice").status_code == 429


def test_invalid_bodies_spend_the_sync_budget(client):
    for _ in range(30):
        resp = client.post(
            "/api/sync/alice",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert resp.status_code == 400

    assert client.post("/api/sync/alice", json={}).status_code == 429


def test_rate_limit_headers(client):
    resp = client.get("/api/sync/alice")
    assert resp.headers["RateLimit-Limit"] == "30"
    assert resp.headers["RateLimit-Remaining"] == "29"
    assert 0 <= int(resp.headers["RateLimit-Reset"]) <= 60

    resp = client.get("/api/admin/stats")
    assert resp.headers["RateLimit-Limit"] == "100"
    assert resp.headers["RateLimit-Remaining"] == "99"


def test_rate_limited_response_has_retry_after(client):
    for _ in range(30):
        client.get("/api/sync/alice")

    resp = client.get("/api/sync/alice")
    assert resp.status_code == 429
    assert resp.headers["RateLimit-Remaining"] == "0"
    assert "Retry-After" in resp.headers
    assert resp.headers["X-Content-Type-Options"] == "nosniff"


def test_other_routes_are_not_rate_limited(client):
    for _ in range(40):
        assert client.get("/missing").status_code == 404
    assert "RateLimit-Limit" not in client.get("/").headers
