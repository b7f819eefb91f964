"""
Storage Service

Typed facade over the database and the only code path through which the
API reads or writes persisted state. One method per logical operation;
no operation spans more than one entity.

Absence is reported as None (or an empty list), never as an error.
Persistence failures (constraint violations, connectivity) propagate to
the caller unchanged.

Every public method runs synchronously and manages its own connection,
so route handlers call it through asyncio.to_thread() (Peewee keeps
connections thread-local).
"""

import json
from datetime import datetime
from functools import wraps
from typing import Any, Callable, Optional, TypeVar

from peewee import Database, DatabaseProxy, Model

from core.logging import get_logger
from db.base import db as default_db
from db.models import (
    ChatMessage,
    FantasyTeam,
    League,
    PlatformConnection,
    Session,
    User,
    WeeklyStats,
)
from schemas.chat import ChatMessageCreate
from schemas.connections import PlatformConnectionCreate, PlatformConnectionUpdate
from schemas.leagues import LeagueCreate
from schemas.stats import WeeklyStatsCreate
from schemas.teams import FantasyTeamCreate, FantasyTeamUpdate
from schemas.users import UserUpsert

DEFAULT_CHAT_LIMIT = 50

F = TypeVar("F", bound=Callable[..., Any])
M = TypeVar("M", bound=Model)


def with_connection(method: F) -> F:
    """Open a connection for the duration of one storage operation."""

    @wraps(method)
    def wrapper(self: "DatabaseStorage", *args, **kwargs):
        with self.db.connection_context():
            return method(self, *args, **kwargs)

    return wrapper  # type: ignore[return-value]


def _foreign_keys(fields: dict[str, Any], *names: str) -> dict[str, Any]:
    """Rename ``<name>_id`` keys to the Peewee foreign key field ``<name>``."""
    for name in names:
        key = f"{name}_id"
        if key in fields:
            fields[name] = fields.pop(key)
    return fields


class DatabaseStorage:
    """Storage operations for users, leagues, teams, chat, stats and platform links."""

    def __init__(
        self,
        database: Database | DatabaseProxy = default_db,
        chat_history_limit: int = DEFAULT_CHAT_LIMIT,
    ):
        self.db = database
        self.chat_history_limit = chat_history_limit
        self.log = get_logger("storage")

    # ------------------------------ Sessions ------------------------------ #

    @with_connection
    def resolve_session(self, sid: str) -> Optional[dict[str, Any]]:
        """Return the identity claims of an unexpired session, or None."""
        return Session.resolve(sid)

    # ------------------------------- Users ------------------------------- #

    @with_connection
    def get_user(self, user_id: str) -> Optional[User]:
        return User.get_or_none(User.id == user_id)

    @with_connection
    def upsert_user(self, user: UserUpsert) -> User:
        """
        Insert the user, or update every supplied field if the id exists.

        Fields absent from the payload keep their stored values; the
        update timestamp is always refreshed. An email already held by a
        different user is not written.
        """
        fields = user.model_dump(exclude_unset=True)
        fields["id"] = user.id
        email = fields.get("email")
        if email is not None and (
            User.select().where((User.email == email) & (User.id != user.id)).exists()
        ):
            # Email is unique; another account already holds this one
            self.log.warning("user_email_conflict", user_id=user.id)
            fields.pop("email")
        now = datetime.utcnow()

        update = {getattr(User, key): value for key, value in fields.items() if key != "id"}
        update[User.updated_at] = now

        (
            User.insert(**fields, created_at=now, updated_at=now)
            .on_conflict(conflict_target=[User.id], update=update)
            .execute()
        )
        return User.get_by_id(user.id)

    # ------------------------------- Leagues ------------------------------- #

    @with_connection
    def create_league(self, data: LeagueCreate) -> League:
        fields = data.model_dump()
        if fields.get("settings") is not None:
            fields["settings"] = json.dumps(fields["settings"])
        league = League.create(**fields)
        self.log.info(
            "league_created",
            league_id=league.id,
            platform=league.platform,
            sport=league.sport,
        )
        return league

    @with_connection
    def get_leagues(self) -> list[League]:
        """All leagues, newest first."""
        return list(League.select().order_by(League.created_at.desc(), League.id.desc()))

    @with_connection
    def get_league(self, league_id: int) -> Optional[League]:
        return League.get_or_none(League.id == league_id)

    # ------------------------------- Fantasy Teams ------------------------------- #

    @with_connection
    def create_fantasy_team(self, data: FantasyTeamCreate) -> FantasyTeam:
        fields = _foreign_keys(data.model_dump(), "user", "league")
        team = FantasyTeam.create(**fields)
        self.log.info(
            "fantasy_team_created",
            team_id=team.id,
            user_id=team.user_id,
            league_id=team.league_id,
        )
        return team

    @with_connection
    def get_fantasy_team(self, team_id: int) -> Optional[FantasyTeam]:
        return FantasyTeam.get_or_none(FantasyTeam.id == team_id)

    @with_connection
    def get_user_fantasy_teams(self, user_id: str) -> list[FantasyTeam]:
        """Teams owned by one user, newest first."""
        return list(
            FantasyTeam.select()
            .where(FantasyTeam.user == user_id)
            .order_by(FantasyTeam.created_at.desc(), FantasyTeam.id.desc())
        )

    @with_connection
    def get_teams_by_league(self, league_id: int) -> list[FantasyTeam]:
        """Teams in a league by standing (rank 1 first); unranked teams last."""
        return list(
            FantasyTeam.select()
            .where(FantasyTeam.league == league_id)
            .order_by(FantasyTeam.standing.asc(nulls="LAST"), FantasyTeam.id.asc())
        )

    @with_connection
    def update_fantasy_team(
        self, team_id: int, updates: FantasyTeamUpdate
    ) -> Optional[FantasyTeam]:
        return self._apply_updates(
            FantasyTeam, team_id, updates.model_dump(exclude_unset=True)
        )

    # ------------------------------- Chat ------------------------------- #

    @with_connection
    def create_chat_message(self, data: ChatMessageCreate) -> ChatMessage:
        fields = _foreign_keys(data.model_dump(), "user", "league")
        message = ChatMessage.create(**fields)
        self.log.info(
            "chat_message_created",
            message_id=message.id,
            league_id=message.league_id,
            user_id=message.user_id,
        )
        return message

    @with_connection
    def get_league_chat_messages(
        self, league_id: int, limit: Optional[int] = None
    ) -> list[ChatMessage]:
        """At most ``limit`` messages for a league, newest first."""
        if limit is None:
            limit = self.chat_history_limit
        if limit < 1:
            raise ValueError("limit must be positive")
        return list(
            ChatMessage.select()
            .where(ChatMessage.league == league_id)
            .order_by(ChatMessage.created_at.desc(), ChatMessage.id.desc())
            .limit(limit)
        )

    # ------------------------------- Weekly Stats ------------------------------- #

    @with_connection
    def create_weekly_stats(self, data: WeeklyStatsCreate) -> WeeklyStats:
        fields = _foreign_keys(data.model_dump(), "team")
        if fields.get("result") is not None:
            fields["result"] = fields["result"].value
        stats = WeeklyStats.create(**fields)
        self.log.info(
            "weekly_stats_created",
            team_id=stats.team_id,
            year=stats.year,
            week=stats.week,
        )
        return stats

    @with_connection
    def get_team_weekly_stats(self, team_id: int) -> list[WeeklyStats]:
        """A team's weekly records in calendar order (year, then week)."""
        return list(
            WeeklyStats.select()
            .where(WeeklyStats.team == team_id)
            .order_by(WeeklyStats.year.asc(), WeeklyStats.week.asc(), WeeklyStats.id.asc())
        )

    # ------------------------------- Platform Connections ------------------------------- #

    @with_connection
    def create_platform_connection(self, data: PlatformConnectionCreate) -> PlatformConnection:
        fields = _foreign_keys(data.model_dump(), "user")
        connection = PlatformConnection.create(**fields)
        self.log.info(
            "platform_connection_created",
            connection_id=connection.id,
            user_id=connection.user_id,
            platform=connection.platform,
        )
        return connection

    @with_connection
    def get_platform_connection(self, connection_id: int) -> Optional[PlatformConnection]:
        return PlatformConnection.get_or_none(PlatformConnection.id == connection_id)

    @with_connection
    def get_user_platform_connections(self, user_id: str) -> list[PlatformConnection]:
        """Active connections only, newest first."""
        return list(
            PlatformConnection.select()
            .where(
                (PlatformConnection.user == user_id)
                & (PlatformConnection.is_active == True)  # noqa: E712
            )
            .order_by(PlatformConnection.created_at.desc(), PlatformConnection.id.desc())
        )

    @with_connection
    def update_platform_connection(
        self, connection_id: int, updates: PlatformConnectionUpdate
    ) -> Optional[PlatformConnection]:
        return self._apply_updates(
            PlatformConnection, connection_id, updates.model_dump(exclude_unset=True)
        )

    @with_connection
    def deactivate_platform_connection(self, connection_id: int) -> Optional[PlatformConnection]:
        connection = self._apply_updates(
            PlatformConnection, connection_id, {"is_active": False}
        )
        if connection is not None:
            self.log.info(
                "platform_connection_deactivated",
                connection_id=connection_id,
                user_id=connection.user_id,
            )
        return connection

    # ------------------------------- Helpers ------------------------------- #

    def _apply_updates(
        self, model: type[M], pk: int, changes: dict[str, Any]
    ) -> Optional[M]:
        """
        Merge ``changes`` into one row and refresh its update timestamp.

        Only the changed columns (plus updated_at) are written, so fields
        missing from ``changes`` are never overwritten. Must be called with
        a connection already open.
        """
        row = model.get_or_none(model._meta.primary_key == pk)
        if row is None:
            return None

        for key, value in changes.items():
            setattr(row, key, value)

        only = [model._meta.fields[key] for key in changes]
        only.append(model.updated_at)
        row.save(only=only)
        return row
