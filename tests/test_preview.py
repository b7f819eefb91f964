"""
Preview app: no database, no auth, empty collections.
"""
from fastapi.testclient import TestClient

from main_preview import app


def test_preview_reports_not_authenticated():
    client = TestClient(app)
    resp = client.get("/api/auth/user")
    assert resp.status_code == 401
    assert resp.json() == {"message": "Not authenticated"}


def test_preview_collections_are_empty():
    client = TestClient(app)
    assert client.get("/api/teams").json() == []
    assert client.get("/api/leagues").json() == []


def test_preview_serves_only_listed_routes():
    client = TestClient(app)
    assert client.get("/api/connections").status_code == 404
    assert client.get("/ping").status_code == 404
