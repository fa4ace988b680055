"""Database engine, session factory, and dependency injection."""

import logging
from typing import Generator

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from feedback_backend.core.config import settings
from feedback_backend.db.base import Base

logger = logging.getLogger("feedback_api")


def build_engine(url: str = None) -> Engine:
    """Create a pooled engine for the given URL.

    SQLite URLs (local runs and tests) share a single connection so an
    in-memory database survives across sessions and threads.
    """
    url = url or settings.DATABASE_URL
    if url.startswith("sqlite"):
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
            echo=settings.DB_ECHO,
        )
    return create_engine(
        url,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_timeout=settings.DB_POOL_TIMEOUT,
        pool_recycle=settings.DB_POOL_RECYCLE,
        pool_pre_ping=True,
        echo=settings.DB_ECHO,
    )


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_schema(engine: Engine) -> None:
    """Create the feedbacks, activity_logs and api_requests tables if missing."""
    import feedback_backend.models  # noqa: F401  (registers models on Base)

    Base.metadata.create_all(bind=engine)


def check_connection(engine: Engine) -> bool:
    """Run ``SELECT 1`` against the store and report whether it answered."""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        logger.info("Database connected successfully")
        return True
    except Exception as e:
        logger.error("Database connection failed: %s", e)
        return False


def get_db(request: Request) -> Generator[Session, None, None]:
    """FastAPI dependency that provides a DB session per request.

    The session factory lives on ``app.state`` so every request checks a
    connection out of the application's own pool and returns it on exit.
    """
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
