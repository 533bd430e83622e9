"""Holding domain model."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass
class Holding:
    """
    A user's position in one stock symbol.

    At most one Holding exists per (owner_id, symbol); repeated purchases are
    merged into it with a weighted-average cost basis.
    """

    holding_id: str
    owner_id: str
    symbol: str
    shares: Decimal = field(default_factory=lambda: Decimal("0"))
    cost_basis: Decimal = field(default_factory=lambda: Decimal("0"))
    created_at: Optional[datetime] = field(default=None)
    updated_at: Optional[datetime] = field(default=None)

    @property
    def investment(self) -> Decimal:
        """Total amount paid for the position."""
        return self.shares * self.cost_basis
