"""Alpha Vantage market data provider."""

import logging
from datetime import date
from typing import Any, Optional

import requests

from finboard.core.exceptions import QuoteUnavailableError, SymbolNotFoundError
from finboard.core.timezone import now_utc
from finboard.domain.models import HistoryInterval
from finboard.domain.views import Quote, PricePoint, SymbolMatch
from finboard.providers.market_data_provider import (
    to_decimal,
    to_optional_decimal,
    to_optional_int,
)

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://www.alphavantage.co/query"

# interval -> (API function, time series key in response)
_HISTORY_FUNCTIONS: dict[HistoryInterval, tuple[str, str]] = {
    HistoryInterval.DAILY: ("TIME_SERIES_DAILY_ADJUSTED", "Time Series (Daily)"),
    HistoryInterval.WEEKLY: ("TIME_SERIES_WEEKLY_ADJUSTED", "Weekly Adjusted Time Series"),
    HistoryInterval.MONTHLY: ("TIME_SERIES_MONTHLY_ADJUSTED", "Monthly Adjusted Time Series"),
}

# Keys Alpha Vantage uses to report errors and throttling with a 200 status
_ERROR_KEYS = ("Error Message", "Note", "Information")


class AlphaVantageProvider:
    """
    Fetches quotes, history and symbol search from Alpha Vantage.

    Field names such as "05. price" are normalized into flat view models.
    """

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = DEFAULT_BASE_URL,
        timeout_seconds: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        self._api_key = api_key
        self._base_url = base_url
        self._timeout = timeout_seconds
        self._session = session or requests.Session()

    def get_quote(self, symbol: str) -> Quote:
        payload = self._request(symbol, function="GLOBAL_QUOTE", symbol=symbol)
        quote = payload.get("Global Quote")
        if not isinstance(quote, dict):
            raise QuoteUnavailableError(symbol, "response missing 'Global Quote'")
        if not quote.get("05. price"):
            raise SymbolNotFoundError(symbol)

        return Quote(
            symbol=quote.get("01. symbol") or symbol,
            price=to_decimal(quote["05. price"], symbol, "price"),
            change_absolute=to_optional_decimal(quote.get("09. change"), symbol, "change"),
            change_percent=to_optional_decimal(
                quote.get("10. change percent"), symbol, "change percent"
            ),
            day_high=to_optional_decimal(quote.get("03. high"), symbol, "high"),
            day_low=to_optional_decimal(quote.get("04. low"), symbol, "low"),
            open=to_optional_decimal(quote.get("02. open"), symbol, "open"),
            volume=to_optional_int(quote.get("06. volume")),
            previous_close=to_optional_decimal(
                quote.get("08. previous close"), symbol, "previous close"
            ),
            as_of=now_utc(),
        )

    def get_history(self, symbol: str, interval: HistoryInterval) -> list[PricePoint]:
        function, series_key = _HISTORY_FUNCTIONS[interval]
        payload = self._request(symbol, function=function, symbol=symbol)
        series = payload.get(series_key)
        if not isinstance(series, dict) or not series:
            raise SymbolNotFoundError(symbol)

        points = []
        for day, bar in series.items():
            try:
                bar_date = date.fromisoformat(day)
            except ValueError:
                raise QuoteUnavailableError(symbol, f"malformed date: {day!r}")
            points.append(
                PricePoint(
                    date=bar_date,
                    open=to_decimal(bar.get("1. open"), symbol, "open"),
                    high=to_decimal(bar.get("2. high"), symbol, "high"),
                    low=to_decimal(bar.get("3. low"), symbol, "low"),
                    close=to_decimal(bar.get("4. close"), symbol, "close"),
                    adjusted_close=to_optional_decimal(
                        bar.get("5. adjusted close"), symbol, "adjusted close"
                    ),
                    volume=to_optional_int(bar.get("6. volume")),
                )
            )
        points.sort(key=lambda p: p.date)
        return points

    def search(self, query: str) -> list[SymbolMatch]:
        payload = self._request(query, function="SYMBOL_SEARCH", keywords=query)
        matches = payload.get("bestMatches") or []
        return [
            SymbolMatch(
                symbol=m.get("1. symbol", ""),
                name=m.get("2. name", ""),
                type=m.get("3. type"),
                region=m.get("4. region"),
                currency=m.get("8. currency"),
            )
            for m in matches
            if m.get("1. symbol")
        ]

    def _request(self, subject: str, **params: str) -> dict[str, Any]:
        """Perform a GET against the query endpoint and return the JSON body."""
        if not self._api_key:
            raise QuoteUnavailableError(subject, "Stock API not configured")

        try:
            response = self._session.get(
                self._base_url,
                params={**params, "apikey": self._api_key},
                timeout=self._timeout,
            )
            response.raise_for_status()
            payload = response.json()
        except requests.Timeout:
            raise QuoteUnavailableError(subject, f"provider timed out after {self._timeout}s")
        except ValueError:
            raise QuoteUnavailableError(subject, "provider returned invalid JSON")
        except requests.RequestException as exc:
            raise QuoteUnavailableError(subject, f"provider request failed: {exc}")

        if not isinstance(payload, dict):
            raise QuoteUnavailableError(subject, "unexpected response shape")
        for key in _ERROR_KEYS:
            if key in payload:
                logger.warning("Alpha Vantage %s for %s: %s", key, subject, payload[key])
                raise QuoteUnavailableError(subject, str(payload[key]))
        return payload
