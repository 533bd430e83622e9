"""View models for portfolio valuation outputs."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from finboard.domain.models import Holding


@dataclass
class HoldingValuation:
    """
    A holding enriched with current market data.

    Quote-derived fields are None when the quote could not be obtained.
    """

    holding: Holding
    investment: Decimal
    current_price: Optional[Decimal] = None
    current_value: Optional[Decimal] = None
    gain_loss: Optional[Decimal] = None
    gain_loss_pct: Optional[Decimal] = None
    quote_as_of: Optional[datetime] = None

    @property
    def is_priced(self) -> bool:
        return self.current_price is not None


@dataclass
class PortfolioSummary:
    """Aggregate over successfully-quoted holdings only."""

    total_value: Decimal = field(default_factory=lambda: Decimal("0"))
    total_investment: Decimal = field(default_factory=lambda: Decimal("0"))
    total_gain_loss: Decimal = field(default_factory=lambda: Decimal("0"))
    total_gain_loss_pct: Decimal = field(default_factory=lambda: Decimal("0"))


@dataclass
class PortfolioValuation:
    """Enriched holdings plus their aggregate summary."""

    holdings: list[HoldingValuation] = field(default_factory=list)
    summary: PortfolioSummary = field(default_factory=PortfolioSummary)
