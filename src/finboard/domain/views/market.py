"""View models for market data. Never persisted, only cached transiently."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass
class Quote:
    """Flat snapshot of a symbol's current market price and related stats."""

    symbol: str
    price: Decimal
    as_of: datetime
    change_absolute: Optional[Decimal] = None
    change_percent: Optional[Decimal] = None
    day_high: Optional[Decimal] = None
    day_low: Optional[Decimal] = None
    open: Optional[Decimal] = None
    volume: Optional[int] = None
    previous_close: Optional[Decimal] = None


@dataclass
class PricePoint:
    """One bar of a historical price series."""

    date: date
    open: Decimal
    high: Decimal
    low: Decimal
    close: Decimal
    adjusted_close: Optional[Decimal] = None
    volume: Optional[int] = None


@dataclass
class SymbolMatch:
    """A symbol search result."""

    symbol: str
    name: str
    type: Optional[str] = None
    region: Optional[str] = None
    currency: Optional[str] = None


@dataclass
class CachedResult(Generic[T]):
    """A value served by the market data service, flagged if it came from cache."""

    value: T
    cached: bool
