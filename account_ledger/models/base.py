"""
Database engine, session management, and base model.

This module is the foundation for all database operations.
Every model inherits from Base. Every request gets a session
from get_db().
"""

import logging
import time

from sqlalchemy import create_engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, DeclarativeBase

from account_ledger.config import get_settings
from account_ledger.exceptions import StorageFaultError

logger = logging.getLogger(__name__)

settings = get_settings()

# --- Engine ---
def build_engine(
    database_url: str, pool_max: int, pool_timeout: float, echo: bool = False
):
    """
    Create an engine whose pool never holds more than pool_max
    connections.

    max_overflow=0 makes pool_max a hard ceiling: when every
    connection is checked out, a request waits up to pool_timeout
    seconds and then fails with a TimeoutError instead of opening
    an extra connection. pool_pre_ping=True tests connections
    before using them, which handles a database restart or a
    stale connection.
    """
    return create_engine(
        database_url,
        echo=echo,
        pool_pre_ping=True,
        pool_size=pool_max,
        max_overflow=0,
        pool_timeout=pool_timeout,
    )


engine = build_engine(
    settings.DATABASE_URL,
    pool_max=settings.PG_MAX,
    pool_timeout=settings.DB_POOL_TIMEOUT,
    echo=settings.DEBUG,
)

# --- Session Factory ---
# autocommit=False means the services explicitly decide when
# a balance change and its transaction record are committed
# together.
# autoflush=False means SQLAlchemy won't send SQL to the
# database until we explicitly flush or commit.
SessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
)


class Base(DeclarativeBase):
    pass


# --- Dependency for FastAPI ---
def get_db():
    """
    Provide a database session for a single request.

    The try/finally pattern ensures the session is always
    closed, even when the client disconnects mid-request.
    Closing a session rolls back any transaction still open,
    so an abandoned request never leaves a half-applied
    change behind.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def wait_for_database(bind=None, retries: int = 10, delay: float = 3.0) -> None:
    """
    Block until the database answers a trivial query.

    The service process often starts before the database is
    ready to accept connections. Each failed attempt is logged
    and followed by a pause; after the last attempt a
    StorageFaultError is raised and startup aborts.
    """
    bind = bind if bind is not None else engine
    retries = max(retries, 1)
    for attempt in range(1, retries + 1):
        try:
            with bind.connect() as connection:
                connection.execute(text("SELECT 1"))
            logger.info("Database reachable after %d attempt(s)", attempt)
            return
        except SQLAlchemyError as e:
            if attempt == retries:
                logger.error(
                    "Could not connect to the database after %d attempts",
                    retries,
                )
                raise StorageFaultError(
                    f"Database unreachable after {retries} attempts"
                ) from e
            logger.warning(
                "Database not ready (attempt %d/%d): %s",
                attempt, retries, e,
            )
            time.sleep(delay)


def warm_pool(bind=None, count: int = 5) -> int:
    """
    Open up to count connections at once and return them to the pool.

    Requests arriving right after startup then find connections
    already established. Never opens more than the pool size.
    Returns the number of connections opened.
    """
    bind = bind if bind is not None else engine
    count = max(0, min(count, bind.pool.size()))
    connections = []
    try:
        for _ in range(count):
            connections.append(bind.connect())
    finally:
        for connection in connections:
            connection.close()
    logger.info("Warmed %d database connection(s)", len(connections))
    return len(connections)
