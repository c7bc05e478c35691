"""Engine and session factory.

SQLite is the default store.  pysqlite's own transaction handling breaks
SAVEPOINT, so for SQLite the driver is put in autocommit mode and
SQLAlchemy emits BEGIN IMMEDIATE itself: the write lock is taken up
front, so concurrent writers queue on the busy timeout instead of
failing on a lock upgrade.  Foreign keys are switched on per connection.
"""

from __future__ import annotations

import logging

from sqlalchemy import create_engine, event
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from palette_oms.domain.exceptions import PersistenceError

logger = logging.getLogger(__name__)

Base = declarative_base()

SQLITE_BUSY_TIMEOUT = 30  # seconds


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    url = make_url(database_url)

    if url.get_backend_name() != "sqlite":
        engine = create_engine(database_url, pool_pre_ping=True, echo=echo)
        logger.info(f"Database engine created for {url.get_backend_name()}")
        return engine

    kwargs: dict = {
        "echo": echo,
        "connect_args": {"check_same_thread": False, "timeout": SQLITE_BUSY_TIMEOUT},
    }
    if url.database in (None, "", ":memory:"):
        # one shared connection, otherwise every session sees its own empty database
        kwargs["poolclass"] = StaticPool
    engine = create_engine(database_url, **kwargs)

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, _connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")

    logger.info(f"SQLite engine created for {url.database or ':memory:'}")
    return engine


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def init_db(engine: Engine) -> None:
    """Create every table that does not exist yet."""
    # registers the mapped classes on Base.metadata
    from palette_oms.infrastructure.persistence import tables  # noqa: F401

    Base.metadata.create_all(bind=engine, checkfirst=True)
    logger.info("Database tables created")


def insert_or_skip(session: Session, model, values: dict, conflict_columns: list[str]) -> int:
    """INSERT one row unless it collides on *conflict_columns*.

    Runs as a single ``INSERT .. ON CONFLICT DO NOTHING`` so the check and
    the write cannot interleave with another writer.  Returns 1 when the
    row was inserted, 0 when it already existed.
    """
    dialect = session.get_bind().dialect.name
    if dialect == "postgresql":
        stmt = postgresql.insert(model)
    elif dialect == "sqlite":
        stmt = sqlite.insert(model)
    else:
        raise PersistenceError(f"Unsupported database dialect '{dialect}'")

    stmt = stmt.values(**values).on_conflict_do_nothing(index_elements=conflict_columns)
    return session.execute(stmt).rowcount
