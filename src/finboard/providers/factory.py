"""Construct the configured market data provider."""

from finboard.config.settings import Settings
from finboard.providers.market_data_provider import MarketDataProvider
from finboard.providers.alpha_vantage_provider import AlphaVantageProvider
from finboard.providers.yahoo_provider import YahooFinanceProvider
from finboard.providers.stub_provider import StubMarketDataProvider


def create_market_provider(settings: Settings) -> MarketDataProvider:
    """Return the provider selected by settings.quote_provider."""
    if settings.quote_provider == "yahoo":
        return YahooFinanceProvider(timeout_seconds=settings.quote_timeout_seconds)
    if settings.quote_provider == "stub":
        return StubMarketDataProvider()
    return AlphaVantageProvider(
        api_key=settings.alpha_vantage_api_key,
        base_url=settings.alpha_vantage_base_url,
        timeout_seconds=settings.quote_timeout_seconds,
    )
