"""Market data provider protocol and shared helpers."""

from concurrent.futures import ThreadPoolExecutor, TimeoutError as FuturesTimeoutError
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Optional, Protocol, TypeVar

from finboard.core.exceptions import QuoteUnavailableError
from finboard.domain.models import HistoryInterval
from finboard.domain.views import Quote, PricePoint, SymbolMatch

T = TypeVar("T")


class MarketDataProvider(Protocol):
    """
    Protocol for market data providers.

    Implementations normalize provider-specific payloads into flat view models
    and raise QuoteUnavailableError (or SymbolNotFoundError) on any failure:
    network errors, timeouts, missing configuration, malformed responses.
    """

    def get_quote(self, symbol: str) -> Quote:
        """Fetch the current quote for an upper-case symbol."""
        ...

    def get_history(self, symbol: str, interval: HistoryInterval) -> list[PricePoint]:
        """Fetch a historical price series, oldest point first."""
        ...

    def search(self, query: str) -> list[SymbolMatch]:
        """Search symbols by ticker or company name."""
        ...


def to_decimal(value: Any, symbol: str, field_name: str) -> Decimal:
    """Parse a provider numeric field, raising QuoteUnavailableError if malformed."""
    try:
        text = str(value).strip().rstrip("%")
        result = Decimal(text)
    except (InvalidOperation, TypeError, ValueError):
        raise QuoteUnavailableError(symbol, f"malformed {field_name}: {value!r}")
    if not result.is_finite():
        raise QuoteUnavailableError(symbol, f"malformed {field_name}: {value!r}")
    return result


def to_optional_decimal(value: Any, symbol: str, field_name: str) -> Optional[Decimal]:
    if value is None or value == "":
        return None
    return to_decimal(value, symbol, field_name)


def to_optional_int(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return None


def call_with_timeout(fn: Callable[[], T], timeout: float, symbol: str) -> T:
    """
    Run a blocking provider call with a timeout.

    The worker thread is abandoned on timeout; the caller gets
    QuoteUnavailableError right away.
    """
    executor = ThreadPoolExecutor(max_workers=1)
    try:
        future = executor.submit(fn)
        return future.result(timeout=timeout)
    except FuturesTimeoutError:
        raise QuoteUnavailableError(symbol, f"provider timed out after {timeout}s")
    finally:
        executor.shutdown(wait=False)
