"""Domain layer - pure business models with no external dependencies."""

from finboard.domain.models import EntryKind, HistoryInterval, Holding, LedgerEntry

__all__ = [
    "EntryKind",
    "HistoryInterval",
    "Holding",
    "LedgerEntry",
]
