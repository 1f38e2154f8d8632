"""
Database engine and session management for the SQLite-backed store.

Uses SQLAlchemy ORM. Engines are created per store instance so tests and
the running app never share state through module globals.
"""

import os
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

# Base class for declarative models
Base = declarative_base()


def _ensure_sqlite_dir(database_url: str) -> None:
    """Create the directory holding a file-based SQLite database."""
    if not database_url.startswith("sqlite") or ":memory:" in database_url:
        return
    db_dir = os.path.dirname(database_url.replace("sqlite:///", ""))
    if db_dir and not os.path.exists(db_dir):
        os.makedirs(db_dir, exist_ok=True)


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Create an engine for the given URL.

    SQLite connections get foreign key enforcement switched on. An
    in-memory SQLite URL is bound to a single shared connection so that
    every session sees the same database.
    """
    _ensure_sqlite_dir(database_url)

    kwargs = {"echo": echo}
    if database_url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if ":memory:" in database_url or database_url == "sqlite://":
            kwargs["poolclass"] = StaticPool

    engine = create_engine(database_url, **kwargs)

    if database_url.startswith("sqlite"):

        @event.listens_for(engine, "connect")
        def set_sqlite_pragma(dbapi_conn, connection_record):
            """Enable foreign key constraints for SQLite connections."""
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


def create_session_factory(engine: Engine) -> sessionmaker:
    """Session factory bound to ``engine``."""
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


def init_db(engine: Engine) -> None:
    """
    Initialize database by creating all tables.
    """
    # Import models to ensure they're registered
    from listo.models import user, shopping_list, list_item, list_participant  # noqa: F401

    Base.metadata.create_all(bind=engine)
