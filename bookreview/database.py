"""
Database Configuration Module

This module sets up SQLAlchemy 2.0 for the Book Review API.

One engine and one session factory are created when this module is first
imported. They are the single shared handle to the store; nothing reconnects
per request.

Session Management Pattern
==========================
We use the "session per request" pattern:
1. Request arrives → create a new session
2. Use session for all database operations in that request
3. Commit in the service layer on success, rollback on failure
4. Close session when request ends

Route handlers are plain `def` functions. FastAPI runs them in its worker
thread pool, so a blocking query never holds up the event loop.
"""

from collections.abc import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from bookreview.config import get_settings

settings = get_settings()


# =============================================================================
# Database Engine
# =============================================================================
# - pool_pre_ping: Test connection health before using (prevents stale connections)
# - echo: Log all SQL statements in debug mode
# SQLite uses a single-connection pool that rejects pool_size/max_overflow.

engine_kwargs: dict = {
    "pool_pre_ping": True,
    "echo": settings.debug,
}
if settings.is_sqlite:
    engine_kwargs["connect_args"] = {"check_same_thread": False}
else:
    engine_kwargs["pool_size"] = settings.db_pool_size
    engine_kwargs["max_overflow"] = settings.db_max_overflow

engine = create_engine(settings.database_url, **engine_kwargs)


# =============================================================================
# Session Factory
# =============================================================================
# - autocommit=False: We control when to commit
# - autoflush=False: Don't auto-flush before queries (more predictable behavior)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)


# =============================================================================
# Base Model Class
# =============================================================================
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    All models inherit from this class:

        class Book(Base):
            __tablename__ = "books"
            ...

    Alembic uses Base.metadata to discover tables for migrations.
    """
    pass


# =============================================================================
# Integer Bounds
# =============================================================================
# Primary keys, OFFSET and LIMIT are signed 64-bit integers in both
# PostgreSQL and SQLite. Larger Python ints fail in the driver with
# OverflowError before the query runs.

MAX_SQL_INTEGER = 2**63 - 1


def is_storable_id(value: int) -> bool:
    """Whether value can be a primary key; ids outside this range never exist."""
    return 1 <= value <= MAX_SQL_INTEGER


def clamp_offset(value: int) -> int:
    """Cap an OFFSET so a far-away page reads as empty instead of failing."""
    return min(value, MAX_SQL_INTEGER)


# =============================================================================
# Dependency Injection
# =============================================================================
def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI.

    Creates a session, yields it to the route handler and closes it
    when the request ends, even if an exception occurred.

    Usage in Routes:
        from bookreview.dependencies import DbSession

        @router.get("/books")
        def list_books(db: DbSession):
            ...

    Yields:
        SQLAlchemy Session instance
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# =============================================================================
# Utility Functions
# =============================================================================
def create_tables() -> None:
    """
    Create all database tables.

    Used for local development and by the seed script.
    In production, use Alembic migrations instead.
    """
    # Import models so every table is registered on Base.metadata
    import bookreview.models  # noqa: F401

    Base.metadata.create_all(bind=engine)


def drop_tables() -> None:
    """
    Drop all database tables.

    DANGER: This deletes all data! Development and testing only.
    """
    import bookreview.models  # noqa: F401

    Base.metadata.drop_all(bind=engine)
