"""
Database engine for PocketLedger.
Kept apart from the models so repositories can import it without cycles.
SQLite databases run in Write-Ahead Logging (WAL) mode.
"""

from sqlmodel import SQLModel, create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from typing import Optional
import logging

from config import get_settings

logger = logging.getLogger(__name__)

_engine: Optional[Engine] = None


def get_engine() -> Engine:
    """Engine for the configured database, created on first use."""
    global _engine
    if _engine is None:
        settings = get_settings()
        # Streamlit reruns scripts on worker threads
        connect_args = {"check_same_thread": False} if settings.is_sqlite else {}
        _engine = create_engine(settings.database_url, echo=settings.db_echo, connect_args=connect_args)
        if settings.is_sqlite:
            _enable_wal_mode(_engine)
    return _engine


def _enable_wal_mode(engine: Engine) -> None:
    """Let the UI read while a write commits; wait up to 5s on a locked file."""
    try:
        with engine.connect() as conn:
            conn.exec_driver_sql("PRAGMA journal_mode=WAL")
            conn.exec_driver_sql("PRAGMA busy_timeout=5000")
    except SQLAlchemyError as e:
        logger.warning(f"Could not enable WAL mode: {e}")


def reset_engine() -> None:
    """Dispose of the cached engine so the next call honours new settings."""
    global _engine
    if _engine is not None:
        _engine.dispose()
    _engine = None


def init_db() -> None:
    """Create any missing tables."""
    from models import User, Transaction, UserPreferences  # noqa: F401

    SQLModel.metadata.create_all(get_engine())
    logger.info("Database initialized")
