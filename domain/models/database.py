"""
Database configuration and session management.

A ``Database`` owns one engine and one session factory. The application
factory builds it from settings and keeps it on ``app.state``; nothing in the
package creates an engine at import time.
"""

import logging
from typing import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger("nutrition_tracker.database")

# Create SQLAlchemy Base
Base = declarative_base()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores ON DELETE CASCADE unless asked per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """Engine + session factory for one database URL."""

    def __init__(self, url: str, echo: bool = False):
        self.url = make_url(url)
        engine_kwargs = {"echo": echo, "future": True}

        if self.url.get_backend_name() == "sqlite":
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            if self.url.database in (None, "", ":memory:"):
                # one shared connection, otherwise every session sees an empty db
                engine_kwargs["poolclass"] = StaticPool

        self.engine = create_engine(self.url, **engine_kwargs)
        if self.engine.dialect.name == "sqlite":
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)

        self.SessionLocal = sessionmaker(
            bind=self.engine, autoflush=False, expire_on_commit=False, future=True
        )

    @property
    def dialect(self) -> str:
        return self.engine.dialect.name

    def init_database(self) -> None:
        """Initialize database schema"""
        # Importing the package registers every mapped class on Base.metadata
        import domain.models  # noqa: F401

        with self.engine.begin() as conn:
            Base.metadata.create_all(bind=conn)
        logger.info("Database tables created successfully dialect=%s", self.dialect)

    def drop_all(self) -> None:
        Base.metadata.drop_all(bind=self.engine)

    def get_session(self) -> Generator[Session, None, None]:
        """Yield a session and close it on every exit path (FastAPI dependency style)."""
        db = self.SessionLocal()
        try:
            yield db
        finally:
            db.close()

    def dispose(self) -> None:
        self.engine.dispose()
