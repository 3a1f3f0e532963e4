import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Mapping, Optional

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import URL, Connection, Engine, make_url
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool

import app.config as config

logger = logging.getLogger(__name__)

Base = declarative_base()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores FOREIGN KEY clauses unless enabled per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def resolve_url(url) -> URL:
    """Parse `url`, pinning a bare ``postgresql://`` scheme to psycopg2."""
    sa_url = make_url(url)
    if sa_url.drivername == "postgresql":
        sa_url = sa_url.set(drivername="postgresql+psycopg2")
    return sa_url


def make_engine(
    url: str,
    pool_size: int = 10,
    max_overflow: int = 20,
    echo: bool = False,
) -> Engine:
    """Create an engine for `url` with pool settings appropriate for the dialect.

    PostgreSQL (and other server databases) get a sized QueuePool with
    pool_pre_ping. SQLite gets a connection shareable across threads; an
    in-memory SQLite URL uses a StaticPool so every checkout sees the same
    database.
    """
    sa_url = resolve_url(url)
    if sa_url.get_backend_name() == "sqlite":
        kwargs: Dict[str, Any] = {"connect_args": {"check_same_thread": False}}
        if sa_url.database in (None, "", ":memory:"):
            kwargs["poolclass"] = StaticPool
        engine = create_engine(sa_url, echo=echo, **kwargs)
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    return create_engine(
        sa_url,
        echo=echo,
        pool_size=pool_size,
        max_overflow=max_overflow,
        pool_pre_ping=True,
    )


def _run(conn: Connection, statement, params: Optional[Mapping[str, Any]] = None):
    if params is None:
        return conn.execute(statement)
    return conn.execute(statement, params)


def fetch_all(conn: Connection, statement, params: Optional[Mapping[str, Any]] = None) -> List[Dict[str, Any]]:
    return [dict(row) for row in _run(conn, statement, params).mappings()]


def fetch_one(conn: Connection, statement, params: Optional[Mapping[str, Any]] = None) -> Optional[Dict[str, Any]]:
    row = _run(conn, statement, params).mappings().first()
    return dict(row) if row is not None else None


def execute(conn: Connection, statement, params: Optional[Mapping[str, Any]] = None) -> int:
    return _run(conn, statement, params).rowcount


class Database:
    """Process-scoped handle on the connection pool.

    Each primitive checks a connection out of the pool, runs one statement and
    returns it. Multi-statement work goes through `transaction()`.
    """

    def __init__(self, engine: Engine):
        self.engine = engine

    @classmethod
    def from_settings(cls, conf=None) -> "Database":
        conf = conf or config.settings
        engine = make_engine(
            conf.DATABASE_URL,
            pool_size=conf.DB_POOL_SIZE,
            max_overflow=conf.DB_MAX_OVERFLOW,
            echo=conf.DB_ECHO,
        )
        return cls(engine)

    @property
    def dialect(self) -> str:
        return self.engine.dialect.name

    def query_many(self, statement, params: Optional[Mapping[str, Any]] = None) -> List[Dict[str, Any]]:
        with self.engine.connect() as conn:
            return fetch_all(conn, statement, params)

    def query_one(self, statement, params: Optional[Mapping[str, Any]] = None) -> Optional[Dict[str, Any]]:
        with self.engine.connect() as conn:
            return fetch_one(conn, statement, params)

    def execute(self, statement, params: Optional[Mapping[str, Any]] = None) -> int:
        with self.engine.begin() as conn:
            return execute(conn, statement, params)

    @contextmanager
    def transaction(self) -> Iterator[Connection]:
        """Yield a connection inside BEGIN; COMMIT on success, ROLLBACK on any error."""
        with self.engine.begin() as conn:
            yield conn

    def dispose(self) -> None:
        logger.info("Disposing connection pool for %s", self.engine.url.render_as_string(hide_password=True))
        self.engine.dispose()


def get_db(request: Request) -> Database:
    return request.app.state.database
