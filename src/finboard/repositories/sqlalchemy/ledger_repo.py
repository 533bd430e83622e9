"""SQLAlchemy implementation of LedgerRepository."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import and_, extract, func
from sqlalchemy.orm import Session

from finboard.core.timezone import now_utc, to_storage, from_storage
from finboard.domain.models import EntryKind, LedgerEntry
from finboard.domain.views import LedgerSummary, MonthlyTotal, CategoryTotal
from finboard.repositories.sqlalchemy.orm_models import LedgerEntryORM

# Public sort keys -> ORM columns
SORT_COLUMNS = {
    "date": LedgerEntryORM.occurred_on,
    "amount": LedgerEntryORM.amount,
    "category": LedgerEntryORM.category,
    "type": LedgerEntryORM.kind,
    "created": LedgerEntryORM.created_at,
}


def _to_decimal(value) -> Decimal:
    return Decimal(str(value)) if value is not None else Decimal("0")


class SqlAlchemyLedgerRepository:
    """SQLAlchemy-backed ledger entry repository."""

    def __init__(self, db: Session):
        self._db = db

    def create(self, entry: LedgerEntry) -> LedgerEntry:
        """Persist a new entry."""
        orm_entry = self._to_orm(entry)
        self._db.add(orm_entry)
        self._db.commit()
        self._db.refresh(orm_entry)
        return self._to_domain(orm_entry)

    def get_by_id(self, entry_id: str) -> Optional[LedgerEntry]:
        """Retrieve entry by ID."""
        orm_entry = self._db.query(LedgerEntryORM).filter(
            LedgerEntryORM.entry_id == entry_id
        ).first()
        return self._to_domain(orm_entry) if orm_entry else None

    def update(self, entry: LedgerEntry) -> LedgerEntry:
        """Update an existing entry."""
        orm_entry = self._db.query(LedgerEntryORM).filter(
            LedgerEntryORM.entry_id == entry.entry_id
        ).first()
        if not orm_entry:
            raise ValueError(f"Ledger entry not found: {entry.entry_id}")

        orm_entry.kind = entry.kind
        orm_entry.category = entry.category
        orm_entry.amount = entry.amount
        orm_entry.occurred_on = to_storage(entry.occurred_on)
        orm_entry.note = entry.note
        orm_entry.updated_at = to_storage(entry.updated_at)

        self._db.commit()
        self._db.refresh(orm_entry)
        return self._to_domain(orm_entry)

    def delete(self, entry_id: str) -> None:
        """Delete an entry."""
        self._db.query(LedgerEntryORM).filter(
            LedgerEntryORM.entry_id == entry_id
        ).delete()
        self._db.commit()

    def query(
        self,
        owner_id: str,
        kind: Optional[EntryKind] = None,
        category: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        sort_field: str = "date",
        descending: bool = True,
    ) -> list[LedgerEntry]:
        """Query an owner's entries with filters."""
        column = SORT_COLUMNS[sort_field]
        order = column.desc() if descending else column.asc()

        query = (
            self._db.query(LedgerEntryORM)
            .filter(and_(*self._conditions(owner_id, kind, category, start_date, end_date)))
            .order_by(order, LedgerEntryORM.entry_id)
        )
        return [self._to_domain(e) for e in query.all()]

    def totals_by_kind(
        self,
        owner_id: str,
        kind: Optional[EntryKind] = None,
        category: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> LedgerSummary:
        """Sum amounts per kind over the filtered set."""
        rows = (
            self._db.query(LedgerEntryORM.kind, func.sum(LedgerEntryORM.amount))
            .filter(and_(*self._conditions(owner_id, kind, category, start_date, end_date)))
            .group_by(LedgerEntryORM.kind)
            .all()
        )

        summary = LedgerSummary()
        for row_kind, total in rows:
            if row_kind == EntryKind.INCOME:
                summary.total_income = _to_decimal(total)
            elif row_kind == EntryKind.EXPENSE:
                summary.total_expense = _to_decimal(total)
        return summary

    def monthly_totals(self, owner_id: str, since: datetime) -> list[MonthlyTotal]:
        """Sum amounts grouped by (year, month, kind)."""
        year = extract("year", LedgerEntryORM.occurred_on)
        month = extract("month", LedgerEntryORM.occurred_on)
        rows = (
            self._db.query(year, month, LedgerEntryORM.kind, func.sum(LedgerEntryORM.amount))
            .filter(
                LedgerEntryORM.owner_id == owner_id,
                LedgerEntryORM.occurred_on >= to_storage(since),
            )
            .group_by(year, month, LedgerEntryORM.kind)
            .order_by(year, month, LedgerEntryORM.kind)
            .all()
        )
        return [
            MonthlyTotal(year=int(y), month=int(m), kind=EntryKind(k), total=_to_decimal(total))
            for y, m, k, total in rows
        ]

    def category_totals(self, owner_id: str, since: datetime) -> list[CategoryTotal]:
        """Sum amounts grouped by (category, kind), largest first."""
        total = func.sum(LedgerEntryORM.amount)
        rows = (
            self._db.query(LedgerEntryORM.category, LedgerEntryORM.kind, total)
            .filter(
                LedgerEntryORM.owner_id == owner_id,
                LedgerEntryORM.occurred_on >= to_storage(since),
            )
            .group_by(LedgerEntryORM.category, LedgerEntryORM.kind)
            .order_by(total.desc(), LedgerEntryORM.category)
            .all()
        )
        return [
            CategoryTotal(category=c, kind=EntryKind(k), total=_to_decimal(t))
            for c, k, t in rows
        ]

    @staticmethod
    def _conditions(
        owner_id: str,
        kind: Optional[EntryKind],
        category: Optional[str],
        start_date: Optional[datetime],
        end_date: Optional[datetime],
    ) -> list:
        conditions = [LedgerEntryORM.owner_id == owner_id]
        if kind:
            conditions.append(LedgerEntryORM.kind == kind)
        if category:
            conditions.append(LedgerEntryORM.category == category)
        if start_date:
            conditions.append(LedgerEntryORM.occurred_on >= to_storage(start_date))
        if end_date:
            conditions.append(LedgerEntryORM.occurred_on <= to_storage(end_date))
        return conditions

    @staticmethod
    def _to_orm(entry: LedgerEntry) -> LedgerEntryORM:
        """Convert domain model to ORM model."""
        return LedgerEntryORM(
            entry_id=entry.entry_id,
            owner_id=entry.owner_id,
            kind=entry.kind,
            category=entry.category,
            amount=entry.amount,
            occurred_on=to_storage(entry.occurred_on),
            note=entry.note or "",
            created_at=to_storage(entry.created_at or now_utc()),
            updated_at=to_storage(entry.updated_at),
        )

    @staticmethod
    def _to_domain(orm: LedgerEntryORM) -> LedgerEntry:
        """Convert ORM model to domain model."""
        return LedgerEntry(
            entry_id=orm.entry_id,
            owner_id=orm.owner_id,
            kind=orm.kind,
            category=orm.category,
            amount=_to_decimal(orm.amount),
            occurred_on=from_storage(orm.occurred_on),
            note=orm.note or "",
            created_at=from_storage(orm.created_at),
            updated_at=from_storage(orm.updated_at),
        )
