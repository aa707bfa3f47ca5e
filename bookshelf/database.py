from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from bookshelf.core.config import settings
import logging
import sqlite3
import time

logger = logging.getLogger(__name__)

logger.info("BOOKSHELF DATABASE_URL = %s", settings.get_masked_database_url())


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """SQLite ignores ON DELETE CASCADE unless foreign keys are switched on per connection."""
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def _engine_kwargs(url: str) -> dict:
    if url.startswith("sqlite"):
        # FastAPI runs sync endpoints in a threadpool
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True}


engine = create_engine(
    settings.DATABASE_URL,
    echo=False,  # Keep echo off - slow queries are logged separately
    **_engine_kwargs(settings.DATABASE_URL),
)

# Slow query logging (DEBUG mode only)
if settings.DEBUG:

    @event.listens_for(engine, "before_cursor_execute")
    def receive_before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        """Store query start time before execution."""
        context._query_start_time = time.perf_counter()

    @event.listens_for(engine, "after_cursor_execute")
    def receive_after_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        if hasattr(context, "_query_start_time"):
            elapsed_ms = (time.perf_counter() - context._query_start_time) * 1000
            if elapsed_ms >= settings.SLOW_QUERY_THRESHOLD_MS:
                statement_first_line = statement.split("\n")[0].strip()[:100]
                logger.warning("SLOW_QUERY: %.2fms - %s", elapsed_ms, statement_first_line)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """Dependency for getting database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """
    Dev convenience: create all tables on SQLite.

    For any other database the Alembic migrations are the source of truth
    ('alembic upgrade head'); create_all() would not add missing columns to
    existing tables anyway.
    """
    if not settings.is_sqlite:
        logger.info("Skipping create_all() for %s; run 'alembic upgrade head' instead", engine.dialect.name)
        return

    # Import all models so Base.metadata includes every table definition
    from bookshelf import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
