"""
Shared fixtures.

DATABASE_URL must point at a throwaway SQLite file before any
application module (and its Settings) is imported.
"""
import os
import tempfile
from pathlib import Path

_DB_DIR = Path(tempfile.mkdtemp(prefix="fantasy-hub-tests-"))
os.environ["DATABASE_URL"] = f"sqlite:///{_DB_DIR / 'test.db'}"
os.environ["LOG_FORMAT"] = "console"

import pytest
from fastapi.testclient import TestClient

from core.settings import settings
from db.base import close_db, db, init_db
from db.models import ALL_MODELS, Session
from main import app
from schemas.leagues import LeagueCreate
from schemas.teams import FantasyTeamCreate
from schemas.users import UserUpsert
from services.storage import DatabaseStorage


@pytest.fixture(autouse=True)
def database():
    """Fresh tables for every test."""
    init_db(settings.database_url)
    with db.connection_context():
        db.drop_tables(ALL_MODELS)
        db.create_tables(ALL_MODELS)
    yield db
    close_db()


@pytest.fixture
def storage(database):
    return DatabaseStorage(database)


@pytest.fixture
def client(database):
    with TestClient(app) as test_client:
        yield test_client


def open_session(claims: dict) -> str:
    with db.connection_context():
        return Session.open(claims).sid


@pytest.fixture
def login(client):
    """Sign the test client in as the given user id."""

    def _login(user_id: str, **claims) -> TestClient:
        sid = open_session({"sub": user_id, **claims})
        client.cookies.set(settings.session_cookie_name, sid)
        return client

    return _login


@pytest.fixture
def auth_client(login):
    return login("user-1", email="jordan@example.com", first_name="Jordan")


@pytest.fixture
def user(storage):
    return storage.upsert_user(UserUpsert(id="user-1", email="jordan@example.com", first_name="Jordan"))


@pytest.fixture
def other_user(storage):
    return storage.upsert_user(UserUpsert(id="user-2", email="casey@example.com", first_name="Casey"))


@pytest.fixture
def league(storage):
    return storage.create_league(
        LeagueCreate(name="Office League", platform="ESPN", sport="NFL", season="2024", league_id="123")
    )


@pytest.fixture
def team(storage, user, league):
    return storage.create_fantasy_team(
        FantasyTeamCreate(
            user_id=user.id,
            league_id=league.id,
            team_name="Gridiron Gang",
            team_id="7",
            wins=5,
            losses=2,
            points_for="812.40",
            points_against="760.15",
            standing=2,
        )
    )
