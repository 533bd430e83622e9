"""Ledger entry repository protocol."""

from datetime import datetime
from typing import Protocol, Optional

from finboard.domain.models import EntryKind, LedgerEntry
from finboard.domain.views import LedgerSummary, MonthlyTotal, CategoryTotal


class LedgerRepository(Protocol):
    """Interface for ledger entry data access."""

    def create(self, entry: LedgerEntry) -> LedgerEntry:
        """Persist a new entry."""
        ...

    def get_by_id(self, entry_id: str) -> Optional[LedgerEntry]:
        """Retrieve entry by ID regardless of owner."""
        ...

    def update(self, entry: LedgerEntry) -> LedgerEntry:
        """Update an existing entry."""
        ...

    def delete(self, entry_id: str) -> None:
        """Delete an entry (hard delete)."""
        ...

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
        """Query an owner's entries with filters; date bounds are inclusive."""
        ...

    def totals_by_kind(
        self,
        owner_id: str,
        kind: Optional[EntryKind] = None,
        category: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> LedgerSummary:
        """Sum amounts per kind over the filtered set."""
        ...

    def monthly_totals(self, owner_id: str, since: datetime) -> list[MonthlyTotal]:
        """Sum amounts grouped by (year, month, kind), oldest period first."""
        ...

    def category_totals(self, owner_id: str, since: datetime) -> list[CategoryTotal]:
        """Sum amounts grouped by (category, kind), largest total first."""
        ...
