"""Market data providers module."""

from finboard.providers.market_data_provider import MarketDataProvider
from finboard.providers.alpha_vantage_provider import AlphaVantageProvider
from finboard.providers.yahoo_provider import YahooFinanceProvider
from finboard.providers.stub_provider import StubMarketDataProvider
from finboard.providers.factory import create_market_provider

__all__ = [
    "MarketDataProvider",
    "AlphaVantageProvider",
    "YahooFinanceProvider",
    "StubMarketDataProvider",
    "create_market_provider",
]
