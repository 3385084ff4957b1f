"""
Database Configuration Module

SQLAlchemy 2.0 setup for the Bookstore API.

Session Management Pattern
==========================
We use the "session per request" pattern:
1. Request arrives → create a new session
2. Repositories use that session for every statement in the request
3. Repositories commit their own writes
4. Session is closed when the request ends

The engine and session factory are built by the application factory from
explicit settings and stored on ``app.state``; nothing here is a module-level
singleton.
"""

from collections.abc import Generator

from fastapi import Request
from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from bookstore.config import DatabaseConfig


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    Alembic uses ``Base.metadata`` to discover tables for migrations.
    """
    pass


# =============================================================================
# Engine / Session Factory
# =============================================================================
def build_engine(db: DatabaseConfig, echo: bool = False) -> Engine:
    """
    Create the SQLAlchemy engine for the configured database.

    Every storage round-trip is bounded by ``db.request_timeout_seconds``:
    - PostgreSQL: ``statement_timeout`` on each connection, so the server
      cancels a slow statement and the driver raises an error
    - Pool checkout waits at most the same amount of time

    SQLite is supported for local runs and tests; an in-memory database
    uses StaticPool so every session sees the same connection.

    Args:
        db: Database settings
        echo: Log all SQL statements

    Returns:
        Configured Engine
    """
    url = db.sqlalchemy_url

    if url.get_backend_name() == "sqlite":
        in_memory = url.database in (None, "", ":memory:")
        return create_engine(
            url,
            connect_args={
                "check_same_thread": False,
                "timeout": db.request_timeout_seconds,
            },
            poolclass=StaticPool if in_memory else None,
            echo=echo,
        )

    timeout_ms = int(db.request_timeout_seconds * 1000)
    return create_engine(
        url,
        pool_size=db.pool_size,
        max_overflow=db.max_overflow,
        pool_timeout=db.request_timeout_seconds,
        pool_pre_ping=True,  # Verify connections are alive before using
        connect_args={"options": f"-c statement_timeout={timeout_ms}"},
        echo=echo,
    )


def build_session_factory(engine: Engine) -> sessionmaker[Session]:
    """
    Create a session factory bound to ``engine``.

    - autocommit=False: repositories decide when to commit
    - autoflush=False: no implicit flush before queries
    - expire_on_commit=False: returned entities stay readable after commit
    """
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        bind=engine,
    )


# =============================================================================
# Dependency Injection
# =============================================================================
def get_db(request: Request) -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI.

    Opens a session from the factory on ``app.state`` and closes it when the
    request ends, even if the handler raised.

    Yields:
        SQLAlchemy Session instance
    """
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


# =============================================================================
# Utility Functions
# =============================================================================
def create_tables(engine: Engine) -> None:
    """
    Create all database tables.

    Useful for development and tests. In production, use Alembic
    migrations instead.
    """
    Base.metadata.create_all(bind=engine)


def drop_tables(engine: Engine) -> None:
    """
    Drop all database tables.

    DANGER: This deletes all data! Development and tests only.
    """
    Base.metadata.drop_all(bind=engine)
