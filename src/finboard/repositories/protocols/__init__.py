"""Repository protocol definitions (interfaces)."""

from finboard.repositories.protocols.holding_repo import HoldingRepository
from finboard.repositories.protocols.ledger_repo import LedgerRepository

__all__ = [
    "HoldingRepository",
    "LedgerRepository",
]
