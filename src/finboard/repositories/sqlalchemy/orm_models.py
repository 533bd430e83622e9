"""SQLAlchemy ORM model definitions."""

from datetime import datetime

from sqlalchemy import (
    Column,
    String,
    DateTime,
    Text,
    Numeric,
    Index,
    UniqueConstraint,
    Enum as SqlEnum,
)

from finboard.repositories.sqlalchemy.database import Base
from finboard.core.timezone import now_utc, to_storage
from finboard.domain.models.enums import EntryKind


def _utcnow() -> datetime:
    return to_storage(now_utc())


class HoldingORM(Base):
    """SQLAlchemy model for Holding."""

    __tablename__ = "holdings"
    __table_args__ = (
        UniqueConstraint("owner_id", "symbol", name="uq_holdings_owner_symbol"),
    )

    holding_id = Column(String(36), primary_key=True)
    owner_id = Column(String(64), nullable=False, index=True)
    symbol = Column(String(20), nullable=False)
    shares = Column(Numeric(precision=18, scale=8), nullable=False)
    cost_basis = Column(Numeric(precision=18, scale=6), nullable=False)
    created_at = Column(DateTime, nullable=False, default=_utcnow)
    updated_at = Column(DateTime, nullable=True, onupdate=_utcnow)


class LedgerEntryORM(Base):
    """SQLAlchemy model for LedgerEntry."""

    __tablename__ = "ledger_entries"
    __table_args__ = (
        Index("ix_ledger_entries_owner_date", "owner_id", "occurred_on"),
        Index("ix_ledger_entries_owner_kind", "owner_id", "kind"),
    )

    entry_id = Column(String(36), primary_key=True)
    owner_id = Column(String(64), nullable=False)
    kind = Column(SqlEnum(EntryKind), nullable=False)
    category = Column(String(100), nullable=False)
    amount = Column(Numeric(precision=18, scale=2), nullable=False)
    occurred_on = Column(DateTime, nullable=False)
    note = Column(Text, nullable=False, default="")
    created_at = Column(DateTime, nullable=False, default=_utcnow)
    updated_at = Column(DateTime, nullable=True, onupdate=_utcnow)
