"""Ledger entry domain model."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from finboard.domain.models.enums import EntryKind


@dataclass
class LedgerEntry:
    """
    A single dated income or expense record.

    Amounts are non-negative; income adds to and expense subtracts from the
    net balance.
    """

    entry_id: str
    owner_id: str
    kind: EntryKind
    category: str
    amount: Decimal
    occurred_on: datetime
    note: str = ""
    created_at: Optional[datetime] = field(default=None)
    updated_at: Optional[datetime] = field(default=None)

    def __post_init__(self) -> None:
        if isinstance(self.kind, str):
            self.kind = EntryKind(self.kind)

    @property
    def signed_amount(self) -> Decimal:
        """Amount with the sign implied by kind."""
        if self.kind == EntryKind.EXPENSE:
            return -self.amount
        return self.amount
