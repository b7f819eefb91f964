from urllib.parse import urlparse

from peewee import Database, DatabaseProxy, Model
from playhouse.db_url import connect

from core.logging import get_logger

log = get_logger("db")

# Bound to a concrete database by init_db() at process start
db = DatabaseProxy()


class BaseModel(Model):
    class Meta:
        database = db


def create_database(
    database_url: str,
    max_connections: int = 20,
    stale_timeout: int = 300,
) -> Database:
    """
    Build a peewee database from a URL.

    postgresql+pool:// URLs get a connection pool; sqlite:// URLs get
    foreign-key enforcement switched on.
    """
    scheme = urlparse(database_url).scheme
    if scheme.startswith("sqlite"):
        return connect(database_url, pragmas={"foreign_keys": 1})
    if scheme.endswith("+pool"):
        return connect(
            database_url,
            max_connections=max_connections,
            stale_timeout=stale_timeout,
        )
    return connect(database_url)


def init_db(database_url: str, **pool_options) -> None:
    """Bind the database and create tables if they don't exist."""
    db.initialize(create_database(database_url, **pool_options))

    from .models import ALL_MODELS

    # Order matters for foreign key dependencies (see ALL_MODELS)
    with db.connection_context():
        db.create_tables(ALL_MODELS, safe=True)
    log.info("database_initialized", tables=len(ALL_MODELS))


def close_db() -> None:
    """Close database connections."""
    if db.obj is None:
        return
    if not db.is_closed():
        db.close()
    if hasattr(db.obj, "close_all"):
        db.obj.close_all()
    log.info("database_closed")
