"""
Database connection cache and session helpers
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, AsyncIterator, Callable, Dict, Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from app.core.config import settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


@dataclass
class Database:
    """An established database handle: engine plus session factory"""

    engine: Engine
    session_factory: sessionmaker

    def session(self) -> Session:
        return self.session_factory()

    def create_all(self) -> None:
        Base.metadata.create_all(bind=self.engine)

    def drop_all(self) -> None:
        Base.metadata.drop_all(bind=self.engine)

    def dispose(self) -> None:
        self.engine.dispose()


def engine_options(database_url: str) -> Dict[str, Any]:
    """Pool sizing and timeouts for the given database URL.

    SQLite has no server to select, so only the busy timeout applies there.
    """
    if database_url.startswith("sqlite"):
        return {
            "connect_args": {
                "check_same_thread": False,
                "timeout": settings.DB_SERVER_SELECTION_TIMEOUT,
            },
        }
    return {
        "pool_size": settings.DB_MAX_POOL_SIZE,
        "max_overflow": 0,
        "pool_timeout": settings.DB_SERVER_SELECTION_TIMEOUT,
        "pool_pre_ping": True,
    }


def open_database(database_url: str) -> Database:
    """Create the engine and verify the server answers before handing it out"""
    engine = create_engine(database_url, **engine_options(database_url))
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except Exception:
        engine.dispose()
        raise
    return Database(
        engine=engine,
        session_factory=sessionmaker(autocommit=False, autoflush=False, bind=engine),
    )


class ConnectionCache:
    """Process-wide database handle with single-flight acquisition.

    The first caller starts the connection attempt; concurrent callers await
    that same attempt. A failed attempt is forgotten so the next call retries.
    """

    def __init__(
        self,
        database_url: str,
        connect: Callable[[str], Database] = open_database,
    ):
        self.database_url = database_url
        self._connect = connect
        self._conn: Optional[Database] = None
        self._pending: Optional[asyncio.Future] = None
        self.attempts = 0

    @property
    def connected(self) -> bool:
        return self._conn is not None

    async def get_connection(self) -> Database:
        if self._conn is not None:
            return self._conn

        if self._pending is None:
            self._pending = asyncio.ensure_future(self._establish())

        # shield so a cancelled caller does not cancel the shared attempt
        return await asyncio.shield(self._pending)

    async def _establish(self) -> Database:
        self.attempts += 1
        logger.info(f"Connecting to database (attempt {self.attempts})")
        try:
            conn = await asyncio.to_thread(self._connect, self.database_url)
        except Exception:
            self._pending = None
            logger.exception("Database connection failed")
            raise
        self._conn = conn
        self._pending = None
        logger.info("Database connection established")
        return conn

    def reset(self) -> None:
        """Dispose the cached handle; the next call reconnects"""
        if self._conn is not None:
            self._conn.dispose()
        self._conn = None
        self._pending = None


@lru_cache(maxsize=1)
def get_connection_cache() -> ConnectionCache:
    """Return the connection cache for this process, creating it once"""
    return ConnectionCache(settings.DATABASE_URL)


async def get_db() -> AsyncIterator[Session]:
    """FastAPI dependency yielding a session from the cached connection"""
    database = await get_connection_cache().get_connection()
    db = database.session()
    try:
        yield db
    finally:
        db.close()
