"""View models for service outputs."""

from finboard.domain.views.market import Quote, PricePoint, SymbolMatch, CachedResult
from finboard.domain.views.portfolio import (
    HoldingValuation,
    PortfolioSummary,
    PortfolioValuation,
)
from finboard.domain.views.ledger import (
    EntryFilters,
    LedgerSummary,
    MonthlyTotal,
    CategoryTotal,
    PeriodBreakdown,
)

__all__ = [
    "Quote",
    "PricePoint",
    "SymbolMatch",
    "CachedResult",
    "HoldingValuation",
    "PortfolioSummary",
    "PortfolioValuation",
    "EntryFilters",
    "LedgerSummary",
    "MonthlyTotal",
    "CategoryTotal",
    "PeriodBreakdown",
]
