"""Ledger service for income/expense entries and their aggregation."""

import uuid
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from dateutil.relativedelta import relativedelta

from finboard.core.exceptions import ValidationError
from finboard.core.timezone import now_utc, to_utc
from finboard.domain.models import EntryKind, LedgerEntry
from finboard.domain.views import EntryFilters, LedgerSummary, PeriodBreakdown
from finboard.repositories.protocols import LedgerRepository
from finboard.services.access_control import load_owned

SORT_FIELDS = ("date", "amount", "category", "type", "created")
DEFAULT_MONTHS_BACK = 6

_CENT = Decimal("0.01")


@dataclass
class EntryCreate:
    """Input data for recording an entry."""

    kind: EntryKind
    category: str
    amount: Decimal
    occurred_on: Optional[datetime] = None
    note: Optional[str] = None


@dataclass
class EntryUpdate:
    """Fields to overwrite on an existing entry; None leaves a field unchanged."""

    kind: Optional[EntryKind] = None
    category: Optional[str] = None
    amount: Optional[Decimal] = None
    occurred_on: Optional[datetime] = None
    note: Optional[str] = None


def parse_sort(sort: Optional[str]) -> tuple[str, bool]:
    """
    Parse a sort key like "-date" or "amount" into (field, descending).
    """
    key = (sort or "-date").strip()
    descending = key.startswith("-")
    field_name = key.lstrip("-+")
    if field_name not in SORT_FIELDS:
        raise ValidationError(
            f"Invalid sort key '{field_name}'; expected one of: {', '.join(SORT_FIELDS)}"
        )
    return field_name, descending


class LedgerService:
    """
    Service for the income/expense ledger.

    Every id-addressed operation is scoped to the requesting owner.
    """

    def __init__(self, ledger_repo: LedgerRepository):
        self._ledger = ledger_repo

    def record_entry(self, owner_id: str, data: EntryCreate) -> LedgerEntry:
        """Validate and persist a new entry; occurred_on defaults to now."""
        kind = self._validate_kind(data.kind)
        category = self._validate_category(data.category)
        amount = self._validate_amount(data.amount)

        entry = LedgerEntry(
            entry_id=str(uuid.uuid4()),
            owner_id=owner_id,
            kind=kind,
            category=category,
            amount=amount,
            occurred_on=to_utc(data.occurred_on) if data.occurred_on else now_utc(),
            note=(data.note or "").strip(),
            created_at=now_utc(),
        )
        return self._ledger.create(entry)

    def get_entry(self, owner_id: str, entry_id: str) -> LedgerEntry:
        """Get an entry the caller owns."""
        return load_owned(self._ledger.get_by_id(entry_id), owner_id, "Transaction", entry_id)

    def update_entry(self, owner_id: str, entry_id: str, patch: EntryUpdate) -> LedgerEntry:
        """Overwrite the supplied fields of an entry the caller owns."""
        entry = self.get_entry(owner_id, entry_id)

        if patch.kind is not None:
            entry.kind = self._validate_kind(patch.kind)
        if patch.category is not None:
            entry.category = self._validate_category(patch.category)
        if patch.amount is not None:
            entry.amount = self._validate_amount(patch.amount)
        if patch.occurred_on is not None:
            entry.occurred_on = to_utc(patch.occurred_on)
        if patch.note is not None:
            entry.note = patch.note.strip()

        entry.updated_at = now_utc()
        return self._ledger.update(entry)

    def delete_entry(self, owner_id: str, entry_id: str) -> None:
        """Hard-delete an entry the caller owns."""
        entry = self.get_entry(owner_id, entry_id)
        self._ledger.delete(entry.entry_id)

    def list_entries(self, owner_id: str, filters: Optional[EntryFilters] = None) -> list[LedgerEntry]:
        """List the owner's entries matching filters, in the requested order."""
        filters = filters or EntryFilters()
        self._validate_range(filters)
        sort_field, descending = parse_sort(filters.sort)
        return self._ledger.query(
            owner_id=owner_id,
            kind=filters.kind,
            category=filters.category,
            start_date=filters.start_date,
            end_date=filters.end_date,
            sort_field=sort_field,
            descending=descending,
        )

    def summarize(self, owner_id: str, filters: Optional[EntryFilters] = None) -> LedgerSummary:
        """Totals by kind over the filtered set; all zero when nothing matches."""
        filters = filters or EntryFilters()
        self._validate_range(filters)
        return self._ledger.totals_by_kind(
            owner_id=owner_id,
            kind=filters.kind,
            category=filters.category,
            start_date=filters.start_date,
            end_date=filters.end_date,
        )

    def period_breakdown(
        self,
        owner_id: str,
        months_back: int = DEFAULT_MONTHS_BACK,
        now: Optional[datetime] = None,
    ) -> PeriodBreakdown:
        """
        Totals over the trailing months_back calendar months.

        Monthly groups are ordered oldest first; category groups by total,
        largest first.
        """
        if months_back < 1:
            raise ValidationError("months must be at least 1")

        start_date = (now or now_utc()) - relativedelta(months=months_back)
        return PeriodBreakdown(
            start_date=start_date,
            monthly=self._ledger.monthly_totals(owner_id, since=start_date),
            categories=self._ledger.category_totals(owner_id, since=start_date),
        )

    @staticmethod
    def _validate_kind(kind) -> EntryKind:
        try:
            return EntryKind(kind)
        except ValueError:
            raise ValidationError("Type must be income or expense")

    @staticmethod
    def _validate_category(category: Optional[str]) -> str:
        category = (category or "").strip()
        if not category:
            raise ValidationError("Category is required")
        return category

    @staticmethod
    def _validate_amount(amount: Optional[Decimal]) -> Decimal:
        if amount is None or amount < 0:
            raise ValidationError("Amount must be a positive number")
        return amount.quantize(_CENT)

    @staticmethod
    def _validate_range(filters: EntryFilters) -> None:
        if not (filters.start_date and filters.end_date):
            return
        if to_utc(filters.start_date) > to_utc(filters.end_date):
            raise ValidationError("startDate must not be after endDate")
