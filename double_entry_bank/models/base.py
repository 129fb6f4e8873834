"""
Database engine, session factory, and base model.

This module is the foundation for all database operations.
Every model inherits from Base. The engine and session
factory are built from explicit Settings by the application
factory (or the tests), never at import time.
"""

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase, Session

from double_entry_bank.config import Settings


# --- Base Model Class ---
# Every database model (User, Account, Entry) inherits from
# this class. SQLAlchemy uses it to track all models and
# generate the correct SQL for table creation.
class Base(DeclarativeBase):
    pass


def _install_sqlite_locking(engine: Engine) -> None:
    """
    Make SQLite transactions take the write lock up front.

    SQLite has no SELECT ... FOR UPDATE. Starting every
    transaction with BEGIN IMMEDIATE serializes writers at
    begin time, so a locked read is never stale by the time
    the balance check and the writes run.
    """

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        # Hand transaction control to SQLAlchemy's begin event
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def create_db_engine(settings: Settings) -> Engine:
    """
    Build the engine for settings.DATABASE_URL.

    pool_pre_ping=True tests connections before using them,
    which handles cases where the database restarted or a
    connection went stale.

    LOCK_TIMEOUT_MS bounds how long an operation may wait on
    a row lock held by someone else: PostgreSQL gets it as
    lock_timeout, SQLite as its busy timeout.
    """
    url = settings.DATABASE_URL

    if url.startswith("sqlite"):
        engine = create_engine(
            url,
            pool_pre_ping=True,
            connect_args={
                "check_same_thread": False,
                "timeout": settings.LOCK_TIMEOUT_MS / 1000,
            },
        )
        _install_sqlite_locking(engine)
        return engine

    return create_engine(
        url,
        pool_pre_ping=True,
        connect_args={
            "options": f"-c lock_timeout={settings.LOCK_TIMEOUT_MS}",
        },
    )


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    """
    Build the session factory used by the unit of work.

    autoflush=False means SQLAlchemy won't send SQL to the
    database until we explicitly flush or commit.
    expire_on_commit=False keeps loaded attributes readable
    after the unit of work has committed and closed.
    """
    return sessionmaker(
        bind=engine,
        autoflush=False,
        expire_on_commit=False,
    )
