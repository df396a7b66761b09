"""PostgreSQL connection and session management."""

from collections.abc import Generator
from functools import lru_cache

from sqlalchemy import Engine, create_engine, text
from sqlalchemy.orm import Session, sessionmaker

from jsonformatter.core.config import Settings, get_settings


def build_engine(settings: Settings) -> Engine:
    """Create the SQLAlchemy engine for the configured database."""
    return create_engine(
        settings.DATABASE_URL,
        pool_pre_ping=True,
        echo=settings.DEBUG,
        connect_args={"connect_timeout": settings.DATABASE_CONNECT_TIMEOUT_SEC},
    )


@lru_cache
def get_session_factory() -> sessionmaker[Session]:
    """Return the process-wide session factory (engine is created on first use)."""
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=build_engine(get_settings()),
    )


def get_db() -> Generator[Session, None, None]:
    """Dependency that yields a DB session and closes it when done."""
    db = get_session_factory()()
    try:
        yield db
    finally:
        db.close()


def check_db_connected(db: Session) -> bool:
    """Run a trivial query to verify the database is reachable."""
    try:
        db.execute(text("SELECT 1"))
        return True
    except Exception:
        return False
