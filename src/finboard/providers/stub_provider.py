"""Stub market data provider for offline/testing use."""

import random
from datetime import timedelta
from decimal import Decimal

from finboard.core.timezone import now_utc
from finboard.domain.models import HistoryInterval
from finboard.domain.views import Quote, PricePoint, SymbolMatch


# Deterministic fake prices for common symbols: (price, previous close, name)
_STUB_PRICES: dict[str, tuple[Decimal, Decimal, str]] = {
    "AAPL": (Decimal("185.50"), Decimal("184.25"), "Apple Inc."),
    "GOOGL": (Decimal("142.75"), Decimal("141.50"), "Alphabet Inc."),
    "MSFT": (Decimal("378.25"), Decimal("376.80"), "Microsoft Corporation"),
    "AMZN": (Decimal("178.50"), Decimal("177.25"), "Amazon.com, Inc."),
    "TSLA": (Decimal("248.75"), Decimal("250.10"), "Tesla, Inc."),
    "NVDA": (Decimal("485.25"), Decimal("482.50"), "NVIDIA Corporation"),
    "META": (Decimal("505.50"), Decimal("502.75"), "Meta Platforms, Inc."),
    "SPY": (Decimal("485.25"), Decimal("484.10"), "SPDR S&P 500 ETF Trust"),
    "QQQ": (Decimal("418.75"), Decimal("417.50"), "Invesco QQQ Trust"),
    "VTI": (Decimal("252.30"), Decimal("251.80"), "Vanguard Total Stock Market ETF"),
}

_STEP_DAYS = {
    HistoryInterval.DAILY: 1,
    HistoryInterval.WEEKLY: 7,
    HistoryInterval.MONTHLY: 30,
}

_CENT = Decimal("0.01")


class StubMarketDataProvider:
    """
    Stub provider with deterministic fake data for offline operation.

    Uses predefined prices for common symbols; generates seeded random prices
    for unknown symbols.
    """

    def __init__(self, seed: int = 42, history_points: int = 30):
        self._seed = seed
        self._history_points = history_points

    def get_quote(self, symbol: str) -> Quote:
        price, prev_close = self._prices(symbol.upper())
        change = price - prev_close
        return Quote(
            symbol=symbol.upper(),
            price=price,
            change_absolute=change,
            change_percent=(change / prev_close * 100).quantize(Decimal("0.0001")),
            day_high=max(price, prev_close),
            day_low=min(price, prev_close),
            open=prev_close,
            volume=1_000_000,
            previous_close=prev_close,
            as_of=now_utc(),
        )

    def get_history(self, symbol: str, interval: HistoryInterval) -> list[PricePoint]:
        price, _ = self._prices(symbol.upper())
        rng = random.Random(f"{self._seed}:{symbol.upper()}:{interval.value}")
        today = now_utc().date()
        step = _STEP_DAYS[interval]

        points = []
        close = price
        for i in range(self._history_points):
            open_ = (close * Decimal(str(1 + (rng.random() - 0.5) * 0.02))).quantize(_CENT)
            points.append(
                PricePoint(
                    date=today - timedelta(days=i * step),
                    open=open_,
                    high=max(open_, close),
                    low=min(open_, close),
                    close=close,
                    adjusted_close=close,
                    volume=rng.randint(100_000, 5_000_000),
                )
            )
            close = open_
        points.reverse()
        return points

    def search(self, query: str) -> list[SymbolMatch]:
        needle = query.strip().lower()
        return [
            SymbolMatch(symbol=sym, name=name, type="Equity", region="United States", currency="USD")
            for sym, (_, _, name) in _STUB_PRICES.items()
            if needle and (needle in sym.lower() or needle in name.lower())
        ]

    def _prices(self, symbol: str) -> tuple[Decimal, Decimal]:
        if symbol in _STUB_PRICES:
            price, prev_close, _ = _STUB_PRICES[symbol]
            return price, prev_close

        # Deterministic random price based on symbol
        rng = random.Random(f"{self._seed}:{symbol}")
        price = Decimal(str(50 + rng.random() * 200)).quantize(_CENT)
        change_pct = Decimal(str((rng.random() - 0.5) * 0.04))
        prev_close = (price / (1 + change_pct)).quantize(_CENT)
        return price, prev_close
