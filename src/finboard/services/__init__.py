"""Service layer - business logic orchestration."""

from finboard.services.quote_cache import QuoteCache
from finboard.services.market_data_service import MarketDataService
from finboard.services.access_control import load_owned
from finboard.services.portfolio_service import PortfolioService, HoldingUpdate
from finboard.services.ledger_service import LedgerService, EntryCreate, EntryUpdate

__all__ = [
    "QuoteCache",
    "MarketDataService",
    "load_owned",
    "PortfolioService",
    "HoldingUpdate",
    "LedgerService",
    "EntryCreate",
    "EntryUpdate",
]
