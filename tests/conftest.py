"""
Pytest configuration and fixtures for the finance dashboard tests.

This module provides:
- In-memory SQLite database fixtures
- Deterministic and failing market data providers
- A controllable clock for quote cache expiry
- Service and repository fixtures
- An API test client with bearer token helpers
"""

from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Callable, Optional

import pytest
from sqlalchemy import create_engine, StaticPool
from sqlalchemy.orm import sessionmaker, Session
from fastapi.testclient import TestClient

from finboard.main import app
from finboard.api.auth import create_access_token
from finboard.api.deps import get_market_provider, get_quote_cache
from finboard.config.settings import Settings, set_settings, reset_settings
from finboard.core.exceptions import QuoteUnavailableError, SymbolNotFoundError
from finboard.core.timezone import UTC
from finboard.csv import CsvExporter
from finboard.domain.models import EntryKind, HistoryInterval, LedgerEntry
from finboard.domain.views import Quote, PricePoint, SymbolMatch
from finboard.repositories.sqlalchemy.database import Base, get_db, reset_database
# Import ORM models to register them with Base before creating tables
from finboard.repositories.sqlalchemy import orm_models  # noqa: F401
from finboard.repositories.sqlalchemy import (
    SqlAlchemyHoldingRepository,
    SqlAlchemyLedgerRepository,
)
from finboard.services import (
    QuoteCache,
    MarketDataService,
    PortfolioService,
    LedgerService,
    EntryCreate,
)

TEST_JWT_SECRET = "test-secret"
OWNER_ID = "user-1"
OTHER_OWNER_ID = "user-2"


def utc_datetime(year: int, month: int, day: int, hour: int = 12, minute: int = 0) -> datetime:
    """Create an aware UTC datetime."""
    return UTC.localize(datetime(year, month, day, hour, minute))


@pytest.fixture
def fixed_now() -> datetime:
    """Fixed 'now' timestamp for deterministic tests."""
    return utc_datetime(2024, 6, 15, 14, 30)


# =============================================================================
# SETTINGS
# =============================================================================


@pytest.fixture(autouse=True)
def test_settings():
    """Install test settings for every test and restore afterwards."""
    settings = Settings(
        _env_file=None,
        database_url="sqlite://",
        jwt_secret=TEST_JWT_SECRET,
        quote_provider="stub",
        environment="test",
    )
    set_settings(settings)
    reset_database()
    yield settings
    reset_database()
    reset_settings()


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def test_engine():
    """Create test database engine with shared in-memory SQLite."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def test_session(test_engine) -> Session:
    """Create test database session."""
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()


# =============================================================================
# REPOSITORY FIXTURES
# =============================================================================


@pytest.fixture
def holding_repo(test_session) -> SqlAlchemyHoldingRepository:
    """Provide test HoldingRepository."""
    return SqlAlchemyHoldingRepository(test_session)


@pytest.fixture
def ledger_repo(test_session) -> SqlAlchemyLedgerRepository:
    """Provide test LedgerRepository."""
    return SqlAlchemyLedgerRepository(test_session)


# =============================================================================
# MARKET DATA FIXTURES
# =============================================================================


class DeterministicMarketProvider:
    """
    Deterministic market data provider for testing.

    Provides fixed quotes with no randomness and counts every call so tests
    can assert how often the cache let a request through.
    """

    FIXED_QUOTES = {
        "AAPL": (Decimal("130.00"), Decimal("128.00")),
        "MSFT": (Decimal("378.25"), Decimal("376.80")),
        "TSLA": (Decimal("248.75"), Decimal("250.10")),
    }

    def __init__(self, as_of: Optional[datetime] = None, failing_symbols: tuple[str, ...] = ()):
        self._as_of = as_of or utc_datetime(2024, 6, 15, 16)
        self.failing_symbols = set(failing_symbols)
        self.quote_calls: list[str] = []
        self.history_calls: list[tuple[str, HistoryInterval]] = []
        self.search_calls: list[str] = []

    def get_quote(self, symbol: str) -> Quote:
        self.quote_calls.append(symbol)
        if symbol in self.failing_symbols:
            raise QuoteUnavailableError(symbol, "provider request failed: boom")
        if symbol not in self.FIXED_QUOTES:
            raise SymbolNotFoundError(symbol)
        price, prev_close = self.FIXED_QUOTES[symbol]
        return Quote(
            symbol=symbol,
            price=price,
            as_of=self._as_of,
            change_absolute=price - prev_close,
            previous_close=prev_close,
            volume=1000,
        )

    def get_history(self, symbol: str, interval: HistoryInterval) -> list[PricePoint]:
        self.history_calls.append((symbol, interval))
        if symbol not in self.FIXED_QUOTES:
            raise SymbolNotFoundError(symbol)
        price, _ = self.FIXED_QUOTES[symbol]
        start = date(2024, 1, 1)
        return [
            PricePoint(
                date=start + timedelta(days=i),
                open=price + i,
                high=price + i + 1,
                low=price + i - 1,
                close=price + i,
                volume=100 + i,
            )
            for i in range(5)
        ]

    def search(self, query: str) -> list[SymbolMatch]:
        self.search_calls.append(query)
        return [
            SymbolMatch(symbol=sym, name=f"{sym} Corp")
            for sym in self.FIXED_QUOTES
            if query.lower() in sym.lower()
        ]


class FailingMarketProvider:
    """Market provider that always fails."""

    def get_quote(self, symbol: str) -> Quote:
        raise QuoteUnavailableError(symbol, "Network unavailable")

    def get_history(self, symbol: str, interval: HistoryInterval) -> list[PricePoint]:
        raise QuoteUnavailableError(symbol, "Network unavailable")

    def search(self, query: str) -> list[SymbolMatch]:
        raise QuoteUnavailableError(query, "Network unavailable")


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def deterministic_provider(fixed_now) -> DeterministicMarketProvider:
    """Provide deterministic market data provider."""
    return DeterministicMarketProvider(as_of=fixed_now)


@pytest.fixture
def failing_provider() -> FailingMarketProvider:
    """Provide a market provider that always fails."""
    return FailingMarketProvider()


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def quote_cache(fake_clock) -> QuoteCache:
    """Provide a quote cache with a 300s window driven by the fake clock."""
    return QuoteCache(ttl_seconds=300, clock=fake_clock)


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def market_data_service(deterministic_provider, quote_cache) -> MarketDataService:
    """Provide test MarketDataService with deterministic provider."""
    return MarketDataService(
        provider=deterministic_provider,
        cache=quote_cache,
        history_max_points=3,
    )


@pytest.fixture
def portfolio_service(holding_repo, market_data_service) -> PortfolioService:
    """Provide test PortfolioService."""
    return PortfolioService(
        holding_repo=holding_repo,
        market_data_service=market_data_service,
        max_workers=4,
    )


@pytest.fixture
def ledger_service(ledger_repo) -> LedgerService:
    """Provide test LedgerService."""
    return LedgerService(ledger_repo=ledger_repo)


@pytest.fixture
def csv_exporter(ledger_service) -> CsvExporter:
    """Provide test CsvExporter."""
    return CsvExporter(ledger_service=ledger_service)


# =============================================================================
# FACTORY FIXTURES
# =============================================================================


@pytest.fixture
def entry_factory(ledger_service) -> Callable[..., LedgerEntry]:
    """Factory for recording test ledger entries."""

    def _record(
        kind: EntryKind = EntryKind.EXPENSE,
        category: str = "Food",
        amount: str = "10.00",
        occurred_on: Optional[datetime] = None,
        note: Optional[str] = None,
        owner_id: str = OWNER_ID,
    ) -> LedgerEntry:
        return ledger_service.record_entry(
            owner_id,
            EntryCreate(
                kind=kind,
                category=category,
                amount=Decimal(amount),
                occurred_on=occurred_on,
                note=note,
            ),
        )

    return _record


# =============================================================================
# API TEST CLIENT FIXTURE
# =============================================================================


@pytest.fixture
def client(test_engine, deterministic_provider, quote_cache) -> TestClient:
    """Provide FastAPI test client with test database and market data."""
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

    def override_get_db():
        session = TestSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_market_provider] = lambda: deterministic_provider
    app.dependency_overrides[get_quote_cache] = lambda: quote_cache
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def auth_headers(owner_id: str = OWNER_ID) -> dict[str, str]:
    """Bearer headers for owner_id."""
    return {"Authorization": f"Bearer {create_access_token(owner_id)}"}


@pytest.fixture
def owner_headers() -> dict[str, str]:
    return auth_headers(OWNER_ID)


@pytest.fixture
def other_headers() -> dict[str, str]:
    return auth_headers(OTHER_OWNER_ID)


# =============================================================================
# HELPER FUNCTIONS (exported for use in tests)
# =============================================================================


def assert_decimal_equal(
    actual: Decimal,
    expected: Decimal,
    tolerance: Decimal = Decimal("0.01"),
) -> None:
    """Assert two Decimals are equal within tolerance."""
    diff = abs(actual - expected)
    assert diff <= tolerance, f"Expected {expected}, got {actual} (diff={diff})"
