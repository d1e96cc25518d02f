"""
Database engine, session management, and base model.

Every model inherits from Base. Every request gets a session
from get_db(); long-lived collections open their own sessions
through SessionLocal.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase

from shop_ledger.config import get_settings

settings = get_settings()

# --- Engine ---
# The default store is an embedded SQLite file. SQLite connections
# are bound to the creating thread unless told otherwise, and the
# web server hands requests to a thread pool.
connect_args = {}
if settings.DATABASE_URL.startswith("sqlite"):
    connect_args["check_same_thread"] = False

engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    connect_args=connect_args,
)

# --- Session Factory ---
# autocommit=False: a ledger operation spans several store commands
# and is committed once, as a whole, by the caller.
# autoflush=False: SQL is only sent when a store command flushes.
SessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
)


class Base(DeclarativeBase):
    pass


def get_db():
    """
    Provide a database session for a single request.

    The try/finally guarantees the session is closed even when
    the endpoint raises, so connections are never leaked.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
