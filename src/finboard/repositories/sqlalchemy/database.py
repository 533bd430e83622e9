"""Database engine and session management for the holdings/ledger store."""

from typing import Generator, Optional

from sqlalchemy import create_engine, Engine, StaticPool
from sqlalchemy.orm import sessionmaker, Session, declarative_base

from finboard.config.settings import get_settings

Base = declarative_base()

# Built lazily from settings; reset_database() forces a rebuild
_engine: Optional[Engine] = None
_SessionLocal: Optional[sessionmaker] = None


def _is_memory_sqlite(database_url: str) -> bool:
    return database_url in ("sqlite://", "sqlite:///:memory:")


def _engine_options(database_url: str) -> dict:
    """Driver-specific engine arguments."""
    if not database_url.startswith("sqlite"):
        return {"pool_pre_ping": True}

    # Request handlers run in a threadpool
    options: dict = {"connect_args": {"check_same_thread": False}}
    if _is_memory_sqlite(database_url):
        # One shared connection, or every session would see an empty database
        options["poolclass"] = StaticPool
    return options


def get_engine() -> Engine:
    """Get or create the database engine."""
    global _engine
    if _engine is None:
        database_url = get_settings().database_url
        _engine = create_engine(database_url, echo=False, **_engine_options(database_url))
    return _engine


def get_session_factory() -> sessionmaker:
    """Get or create the session factory."""
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=get_engine(),
        )
    return _SessionLocal


def get_db() -> Generator[Session, None, None]:
    """Request-scoped session dependency."""
    db = get_session_factory()()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Create the holdings and ledger tables if missing."""
    from finboard.repositories.sqlalchemy import orm_models  # noqa: F401

    Base.metadata.create_all(bind=get_engine())


def reset_database() -> None:
    """Dispose the engine so the next access rebuilds it from settings."""
    global _engine, _SessionLocal

    if _engine is not None:
        _engine.dispose()

    _engine = None
    _SessionLocal = None
