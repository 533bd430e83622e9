"""View models for ledger queries and aggregation."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from finboard.domain.models import EntryKind


@dataclass
class EntryFilters:
    """Filter set for listing and summarizing ledger entries."""

    kind: Optional[EntryKind] = None
    category: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    sort: str = "-date"


@dataclass
class LedgerSummary:
    """Totals by kind over a filtered entry set."""

    total_income: Decimal = field(default_factory=lambda: Decimal("0"))
    total_expense: Decimal = field(default_factory=lambda: Decimal("0"))

    @property
    def net_balance(self) -> Decimal:
        return self.total_income - self.total_expense


@dataclass
class MonthlyTotal:
    """Summed amount for one (year, month, kind) group."""

    year: int
    month: int
    kind: EntryKind
    total: Decimal


@dataclass
class CategoryTotal:
    """Summed amount for one (category, kind) group."""

    category: str
    kind: EntryKind
    total: Decimal


@dataclass
class PeriodBreakdown:
    """Monthly and per-category totals over a trailing window."""

    start_date: datetime
    monthly: list[MonthlyTotal] = field(default_factory=list)
    categories: list[CategoryTotal] = field(default_factory=list)
