"""
Yahoo Finance market data provider via yfinance.

yfinance calls block without a timeout of their own, so each call runs in a
worker thread bounded by the configured timeout.
"""

import math
from datetime import date, datetime

from finboard.core.exceptions import QuoteUnavailableError, SymbolNotFoundError
from finboard.core.timezone import now_utc
from finboard.domain.models import HistoryInterval
from finboard.domain.views import Quote, PricePoint, SymbolMatch
from finboard.providers.market_data_provider import (
    call_with_timeout,
    to_decimal,
    to_optional_decimal,
    to_optional_int,
)


# Lazy import so tests can patch before import
def _get_yf():
    import yfinance as yf
    return yf


def _is_nan(value) -> bool:
    try:
        return math.isnan(float(value))
    except (TypeError, ValueError):
        return False


# interval -> (yfinance period, yfinance interval)
_HISTORY_PARAMS: dict[HistoryInterval, tuple[str, str]] = {
    HistoryInterval.DAILY: ("6mo", "1d"),
    HistoryInterval.WEEKLY: ("2y", "1wk"),
    HistoryInterval.MONTHLY: ("10y", "1mo"),
}


class YahooFinanceProvider:
    """Fetches quotes, history and symbol search from Yahoo Finance."""

    def __init__(self, timeout_seconds: float = 10.0, search_limit: int = 10):
        self._timeout = timeout_seconds
        self._search_limit = search_limit

    def get_quote(self, symbol: str) -> Quote:
        info = self._guarded(symbol, lambda: _get_yf().Ticker(symbol).info)
        if not isinstance(info, dict):
            raise QuoteUnavailableError(symbol, "unexpected response shape")

        # Price: currentPrice preferred, then regularMarketPrice
        price = info.get("currentPrice")
        if price is None:
            price = info.get("regularMarketPrice")
        if price is None:
            raise SymbolNotFoundError(symbol)

        previous_close = info.get("previousClose")
        if previous_close is None:
            previous_close = info.get("regularMarketPreviousClose")

        return Quote(
            symbol=(info.get("symbol") or symbol).upper(),
            price=to_decimal(price, symbol, "price"),
            change_absolute=to_optional_decimal(
                info.get("regularMarketChange"), symbol, "change"
            ),
            change_percent=to_optional_decimal(
                info.get("regularMarketChangePercent"), symbol, "change percent"
            ),
            day_high=to_optional_decimal(info.get("dayHigh"), symbol, "high"),
            day_low=to_optional_decimal(info.get("dayLow"), symbol, "low"),
            open=to_optional_decimal(info.get("open"), symbol, "open"),
            volume=to_optional_int(info.get("volume")),
            previous_close=to_optional_decimal(previous_close, symbol, "previous close"),
            as_of=now_utc(),
        )

    def get_history(self, symbol: str, interval: HistoryInterval) -> list[PricePoint]:
        period, yf_interval = _HISTORY_PARAMS[interval]
        frame = self._guarded(
            symbol,
            lambda: _get_yf().Ticker(symbol).history(
                period=period, interval=yf_interval, auto_adjust=False
            ),
        )
        if frame is None or frame.empty:
            raise SymbolNotFoundError(symbol)

        points = []
        for index, row in frame.iterrows():
            # Bars still in progress come back with NaN prices
            if _is_nan(row["Close"]):
                continue
            bar_date = index.date() if isinstance(index, datetime) else date.fromisoformat(str(index)[:10])
            points.append(
                PricePoint(
                    date=bar_date,
                    open=to_decimal(row["Open"], symbol, "open"),
                    high=to_decimal(row["High"], symbol, "high"),
                    low=to_decimal(row["Low"], symbol, "low"),
                    close=to_decimal(row["Close"], symbol, "close"),
                    adjusted_close=to_optional_decimal(
                        None if _is_nan(row.get("Adj Close")) else row.get("Adj Close"),
                        symbol,
                        "adjusted close",
                    ),
                    volume=to_optional_int(row.get("Volume")),
                )
            )
        if not points:
            raise SymbolNotFoundError(symbol)
        points.sort(key=lambda p: p.date)
        return points

    def search(self, query: str) -> list[SymbolMatch]:
        quotes = self._guarded(
            query,
            lambda: _get_yf().Search(query, max_results=self._search_limit).quotes,
        )
        return [
            SymbolMatch(
                symbol=q["symbol"],
                name=q.get("longname") or q.get("shortname") or q["symbol"],
                type=q.get("quoteType"),
                region=q.get("exchange"),
                currency=q.get("currency"),
            )
            for q in quotes or []
            if q.get("symbol")
        ]

    def _guarded(self, symbol: str, fn):
        """Run a yfinance call with a timeout, mapping any failure to QuoteUnavailableError."""
        try:
            return call_with_timeout(fn, self._timeout, symbol)
        except QuoteUnavailableError:
            raise
        except Exception as exc:
            raise QuoteUnavailableError(symbol, f"yfinance error: {exc}")
