"""Domain models package."""

from finboard.domain.models.enums import EntryKind, HistoryInterval
from finboard.domain.models.holding import Holding
from finboard.domain.models.ledger_entry import LedgerEntry

__all__ = [
    "EntryKind",
    "HistoryInterval",
    "Holding",
    "LedgerEntry",
]
