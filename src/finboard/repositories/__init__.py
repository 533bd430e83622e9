"""Repository layer - data access abstractions and implementations."""

from finboard.repositories.protocols import HoldingRepository, LedgerRepository

__all__ = [
    "HoldingRepository",
    "LedgerRepository",
]
