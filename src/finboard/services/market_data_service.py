"""Market data service: cached quotes, history and symbol search."""

import logging

from finboard.core.exceptions import ValidationError
from finboard.domain.models import HistoryInterval
from finboard.domain.views import CachedResult, Quote, PricePoint, SymbolMatch
from finboard.providers.market_data_provider import MarketDataProvider
from finboard.services.quote_cache import QuoteCache

logger = logging.getLogger(__name__)


def normalize_symbol(symbol: str) -> str:
    """Strip whitespace and uppercase a ticker; empty is a validation error."""
    normalized = (symbol or "").strip().upper()
    if not normalized:
        raise ValidationError("Stock symbol is required")
    return normalized


class MarketDataService:
    """
    Wraps a market data provider with the quote cache.

    Provider failures propagate as QuoteUnavailableError and are never cached.
    """

    def __init__(
        self,
        provider: MarketDataProvider,
        cache: QuoteCache,
        history_max_points: int = 100,
    ):
        self._provider = provider
        self._cache = cache
        self._history_max_points = history_max_points

    def get_quote(self, symbol: str) -> CachedResult[Quote]:
        """Return the current quote for a symbol, from cache when fresh."""
        symbol = normalize_symbol(symbol)
        key = f"quote:{symbol}"

        cached = self._cache.get(key)
        if cached is not None:
            return CachedResult(value=cached, cached=True)

        quote = self._provider.get_quote(symbol)
        self._cache.set(key, quote)
        logger.debug("Fetched quote for %s from provider", symbol)
        return CachedResult(value=quote, cached=False)

    def get_history(self, symbol: str, interval: str = "daily") -> CachedResult[list[PricePoint]]:
        """
        Return up to history_max_points of the most recent bars, oldest first.
        """
        symbol = normalize_symbol(symbol)
        try:
            history_interval = HistoryInterval(interval)
        except ValueError:
            allowed = ", ".join(i.value for i in HistoryInterval)
            raise ValidationError(f"Invalid interval '{interval}'; expected one of: {allowed}")

        key = f"history:{symbol}:{history_interval.value}"
        cached = self._cache.get(key)
        if cached is not None:
            return CachedResult(value=cached, cached=True)

        points = self._provider.get_history(symbol, history_interval)
        points = points[-self._history_max_points:]
        self._cache.set(key, points)
        return CachedResult(value=points, cached=False)

    def search_symbols(self, query: str) -> CachedResult[list[SymbolMatch]]:
        """Search symbols by ticker or name. An empty result is cached too."""
        query = (query or "").strip()
        if not query:
            raise ValidationError("Search query is required")

        key = f"search:{query.lower()}"
        cached = self._cache.get(key)
        if cached is not None:
            return CachedResult(value=cached, cached=True)

        matches = self._provider.search(query)
        self._cache.set(key, matches)
        return CachedResult(value=matches, cached=False)
