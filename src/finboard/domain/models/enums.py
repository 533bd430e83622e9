"""Enumerations for domain models."""

from enum import Enum


class EntryKind(str, Enum):
    """Kinds of ledger entries. The sign of an amount is implied by its kind."""

    INCOME = "income"
    EXPENSE = "expense"


class HistoryInterval(str, Enum):
    """Bar size for historical price series."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
