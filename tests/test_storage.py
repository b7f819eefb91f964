"""
Storage service tests against a real SQLite database.
"""
from datetime import datetime, timedelta
from decimal import Decimal

import pytest
from peewee import IntegrityError

from db.models import FantasyTeam, Session
from schemas.chat import ChatMessageCreate
from schemas.connections import PlatformConnectionCreate, PlatformConnectionUpdate
from schemas.leagues import LeagueCreate
from schemas.stats import WeeklyStatsCreate
from schemas.teams import FantasyTeamCreate, FantasyTeamUpdate
from schemas.users import UserUpsert
from services.storage import DatabaseStorage


def _league(storage, name="League", **overrides):
    data = dict(name=name, platform="Sleeper", sport="NFL", season="2024", league_id=f"ext-{name}")
    data.update(overrides)
    return storage.create_league(LeagueCreate(**data))


def _team(storage, user_id, league_id, name="Team", standing=None, **overrides):
    return storage.create_fantasy_team(
        FantasyTeamCreate(
            user_id=user_id,
            league_id=league_id,
            team_name=name,
            team_id=f"ext-{name}",
            standing=standing,
            **overrides,
        )
    )


# ---------- Users ----------


def test_get_user_absent_returns_none(storage):
    assert storage.get_user("nobody") is None


def test_upsert_user_inserts_new_user(storage):
    user = storage.upsert_user(UserUpsert(id="u-1", email="a@example.com", first_name="Ana"))
    assert user.id == "u-1"
    assert user.created_at is not None
    assert storage.get_user("u-1").email == "a@example.com"


def test_upsert_user_updates_supplied_fields_only(storage):
    first = storage.upsert_user(UserUpsert(id="u-1", email="a@example.com", first_name="Ana"))
    second = storage.upsert_user(UserUpsert(id="u-1", last_name="Lopez"))

    assert second.email == "a@example.com"
    assert second.first_name == "Ana"
    assert second.last_name == "Lopez"
    assert second.updated_at >= first.updated_at


def test_upsert_user_overwrites_existing_values(storage):
    storage.upsert_user(UserUpsert(id="u-1", email="old@example.com"))
    user = storage.upsert_user(UserUpsert(id="u-1", email="new@example.com"))
    assert user.email == "new@example.com"


def test_upsert_user_skips_email_held_by_another_user(storage):
    storage.upsert_user(UserUpsert(id="u-1", email="shared@example.com"))
    user = storage.upsert_user(UserUpsert(id="u-2", email="shared@example.com", first_name="Bo"))

    assert user.email is None
    assert user.first_name == "Bo"
    assert storage.get_user("u-1").email == "shared@example.com"


def test_resolve_session(storage):
    with storage.db.connection_context():
        live = Session.open({"sub": "u-1", "email": "a@example.com"}).sid
        expired = Session.open({"sub": "u-2"}, ttl=timedelta(seconds=-1)).sid

    assert storage.resolve_session(live) == {"sub": "u-1", "email": "a@example.com"}
    assert storage.resolve_session(expired) is None
    assert storage.resolve_session("unknown") is None


# ---------- Leagues ----------


def test_create_then_get_league_round_trips_fields(storage):
    created = storage.create_league(
        LeagueCreate(name="Office League", platform="ESPN", sport="NFL", season="2024", league_id="123")
    )
    fetched = storage.get_league(created.id)

    assert isinstance(created.id, int)
    for field in ("name", "platform", "sport", "season", "league_id"):
        assert getattr(fetched, field) == getattr(created, field)
    assert fetched.created_at is not None
    assert fetched.updated_at is not None


def test_league_settings_stored_as_json(storage):
    league = _league(storage, settings={"scoring": "ppr", "teams": 12})
    assert storage.get_league(league.id).settings == '{"scoring": "ppr", "teams": 12}'


def test_get_league_absent_returns_none(storage):
    assert storage.get_league(404) is None


def test_get_leagues_newest_first(storage):
    created = [_league(storage, name=f"L{i}") for i in range(3)]
    leagues = storage.get_leagues()
    assert [league.id for league in leagues] == [league.id for league in reversed(created)]


# ---------- Fantasy teams ----------


def test_user_teams_exclude_other_users(storage, user, other_user, league):
    mine = _team(storage, user.id, league.id, name="Mine")
    _team(storage, other_user.id, league.id, name="Theirs")

    teams = storage.get_user_fantasy_teams(user.id)
    assert [t.id for t in teams] == [mine.id]
    assert all(t.user_id == user.id for t in teams)


def test_user_teams_newest_first(storage, user, league):
    first = _team(storage, user.id, league.id, name="First")
    second = _team(storage, user.id, league.id, name="Second")
    assert [t.id for t in storage.get_user_fantasy_teams(user.id)] == [second.id, first.id]


def test_teams_by_league_ordered_by_standing(storage, user, other_user, league):
    _team(storage, user.id, league.id, name="Third", standing=3)
    _team(storage, other_user.id, league.id, name="Unranked", standing=None)
    _team(storage, user.id, league.id, name="First", standing=1)
    _team(storage, other_user.id, league.id, name="Second", standing=2)
    other = _league(storage, name="Other")
    _team(storage, user.id, other.id, name="Elsewhere", standing=1)

    teams = storage.get_teams_by_league(league.id)

    assert [t.team_name for t in teams] == ["First", "Second", "Third", "Unranked"]
    standings = [t.standing for t in teams if t.standing is not None]
    assert standings == sorted(standings)


def test_create_team_for_missing_league_fails(storage, user):
    with pytest.raises(IntegrityError):
        _team(storage, user.id, 999)


def test_update_team_merges_partial_fields(storage, team):
    updated = storage.update_fantasy_team(
        team.id, FantasyTeamUpdate.model_validate({"wins": 6, "standing": 1})
    )
    reloaded = FantasyTeam.get_by_id(team.id)

    assert updated.wins == 6
    assert reloaded.wins == 6
    assert reloaded.standing == 1
    assert reloaded.team_name == "Gridiron Gang"
    assert reloaded.losses == 2
    assert reloaded.points_for == Decimal("812.40")
    assert reloaded.updated_at >= team.updated_at


def test_update_missing_team_returns_none(storage):
    assert storage.update_fantasy_team(999, FantasyTeamUpdate(wins=1)) is None


def test_get_fantasy_team(storage, team):
    assert storage.get_fantasy_team(team.id).team_name == "Gridiron Gang"
    assert storage.get_fantasy_team(999) is None


# ---------- Chat ----------


def test_chat_messages_newest_first_and_limited(storage, user, league):
    created = [
        storage.create_chat_message(ChatMessageCreate(league_id=league.id, user_id=user.id, message=f"msg {i}"))
        for i in range(5)
    ]

    messages = storage.get_league_chat_messages(league.id, limit=3)

    assert len(messages) == 3
    assert [m.id for m in messages] == [m.id for m in reversed(created)][:3]
    timestamps = [m.created_at for m in messages]
    assert timestamps == sorted(timestamps, reverse=True)


def test_chat_default_limit_comes_from_storage(database, user, league):
    storage = DatabaseStorage(database, chat_history_limit=2)
    for i in range(4):
        storage.create_chat_message(ChatMessageCreate(league_id=league.id, user_id=user.id, message=f"m{i}"))
    assert len(storage.get_league_chat_messages(league.id)) == 2


def test_chat_messages_scoped_to_league(storage, user, league):
    other = _league(storage, name="Other")
    storage.create_chat_message(ChatMessageCreate(league_id=other.id, user_id=user.id, message="elsewhere"))
    assert storage.get_league_chat_messages(league.id) == []


def test_chat_limit_must_be_positive(storage, league):
    with pytest.raises(ValueError):
        storage.get_league_chat_messages(league.id, limit=0)


# ---------- Weekly stats ----------


def test_weekly_stats_ordered_by_year_then_week(storage, team):
    for year, week in [(2024, 2), (2023, 17), (2024, 1), (2023, 3)]:
        storage.create_weekly_stats(
            WeeklyStatsCreate(team_id=team.id, week=week, year=year, points="100.5", result="W")
        )

    stats = storage.get_team_weekly_stats(team.id)
    assert [(s.year, s.week) for s in stats] == [(2023, 3), (2023, 17), (2024, 1), (2024, 2)]
    assert stats[0].points == Decimal("100.5")
    assert stats[0].result == "W"


def test_duplicate_week_rejected(storage, team):
    data = WeeklyStatsCreate(team_id=team.id, week=1, year=2024, points="90")
    storage.create_weekly_stats(data)
    with pytest.raises(IntegrityError):
        storage.create_weekly_stats(data)


# ---------- Platform connections ----------


def test_platform_connections_active_only_newest_first(storage, user, other_user):
    espn = storage.create_platform_connection(PlatformConnectionCreate(user_id=user.id, platform="ESPN"))
    yahoo = storage.create_platform_connection(
        PlatformConnectionCreate(user_id=user.id, platform="Yahoo", access_token="tok")
    )
    storage.create_platform_connection(PlatformConnectionCreate(user_id=other_user.id, platform="Sleeper"))
    storage.deactivate_platform_connection(espn.id)

    connections = storage.get_user_platform_connections(user.id)

    assert [c.id for c in connections] == [yahoo.id]
    assert storage.get_platform_connection(espn.id).is_active is False


def test_update_platform_connection_refreshes_tokens(storage, user):
    connection = storage.create_platform_connection(
        PlatformConnectionCreate(user_id=user.id, platform="Yahoo", access_token="old", refresh_token="r1")
    )
    expires = datetime.utcnow() + timedelta(hours=1)

    updated = storage.update_platform_connection(
        connection.id, PlatformConnectionUpdate(access_token="new", expires_at=expires)
    )
    reloaded = storage.get_platform_connection(connection.id)

    assert updated.access_token == "new"
    assert reloaded.access_token == "new"
    assert reloaded.refresh_token == "r1"
    assert reloaded.platform == "Yahoo"


def test_deactivate_missing_connection_returns_none(storage):
    assert storage.deactivate_platform_connection(999) is None
