"""
Database configuration and session management
Handles engine setup, request sessions and retry of conflicting units of work
"""

import logging
import time
from functools import wraps
from typing import Generator

import sentry_sdk
from sqlalchemy import create_engine, pool, text
from sqlalchemy.exc import DisconnectionError, OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.orm.exc import StaleDataError

from quizapp.core.config import settings

logger = logging.getLogger(__name__)

# Create Base class for models
Base = declarative_base()


def _engine_options(url: str) -> dict:
    """Engine keyword arguments for the configured backend"""
    options = {"echo": settings.DEBUG, "pool_pre_ping": True}
    if url.startswith("sqlite"):
        options["connect_args"] = {"check_same_thread": False}
        if url in ("sqlite://", "sqlite:///:memory:"):
            # One shared connection, otherwise every checkout sees an empty database
            options["poolclass"] = pool.StaticPool
    return options


DATABASE_URL = settings.get_database_url()
engine = create_engine(DATABASE_URL, **_engine_options(DATABASE_URL))

# Create SessionLocal class
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine, expire_on_commit=False)


def init_db() -> None:
    """Initialize database, create tables if they don't exist"""
    try:
        # Import all models here to ensure they're registered
        from quizapp import models  # noqa: F401

        Base.metadata.create_all(bind=engine)
        logger.info("Database tables created successfully")

        with engine.connect() as conn:
            result = conn.execute(text("SELECT 1"))
            if result.scalar() == 1:
                logger.info("Database connection successful")
    except Exception as e:
        logger.error(f"Failed to initialize database: {e}")
        if settings.SENTRY_DSN:
            sentry_sdk.capture_exception(e)
        raise


def get_db() -> Generator[Session, None, None]:
    """
    Dependency to get database session
    Ensures proper cleanup after request
    """
    db = SessionLocal()
    try:
        yield db
    except SQLAlchemyError as e:
        logger.error(f"Database error occurred: {e}")
        db.rollback()
        if settings.SENTRY_DSN:
            sentry_sdk.capture_exception(e)
        raise
    finally:
        db.close()


def check_connection() -> dict:
    """Check database connection health"""
    start_time = time.time()
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return {"status": "healthy", "response_time": time.time() - start_time}
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        return {
            "status": "unhealthy",
            "error": str(e),
            "response_time": time.time() - start_time,
        }


def with_db_retry(max_attempts: int = 3, delay: float = 0.05):
    """
    Decorator to retry a unit of work on concurrent-update conflicts

    The wrapped function must take the session as its first argument and
    commit its own work; on failure the session is rolled back before retrying.

    Args:
        max_attempts: Maximum number of attempts
        delay: Delay between retries in seconds
    """

    def decorator(func):
        @wraps(func)
        def wrapper(db: Session, *args, **kwargs):
            for attempt in range(max_attempts):
                try:
                    return func(db, *args, **kwargs)
                except (StaleDataError, OperationalError, DisconnectionError) as e:
                    db.rollback()
                    if attempt == max_attempts - 1:
                        logger.error(
                            f"{func.__name__} failed after {max_attempts} attempts: {e}"
                        )
                        raise
                    logger.warning(
                        f"{func.__name__} conflicted (attempt {attempt + 1}/{max_attempts}): {e}"
                    )
                    time.sleep(delay * (attempt + 1))

        return wrapper

    return decorator
