"""SQLAlchemy repository implementations."""

from finboard.repositories.sqlalchemy.database import (
    get_engine,
    get_session_factory,
    get_db,
    init_db,
    reset_database,
    Base,
)
from finboard.repositories.sqlalchemy.holding_repo import SqlAlchemyHoldingRepository
from finboard.repositories.sqlalchemy.ledger_repo import SqlAlchemyLedgerRepository

__all__ = [
    "get_engine",
    "get_session_factory",
    "get_db",
    "init_db",
    "reset_database",
    "Base",
    "SqlAlchemyHoldingRepository",
    "SqlAlchemyLedgerRepository",
]
