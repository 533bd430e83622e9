"""Dependency injection for FastAPI."""

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from finboard.config.settings import get_settings
from finboard.csv import CsvExporter
from finboard.providers import MarketDataProvider
from finboard.repositories.sqlalchemy.database import get_db
from finboard.repositories.sqlalchemy import (
    SqlAlchemyHoldingRepository,
    SqlAlchemyLedgerRepository,
)
from finboard.services import (
    QuoteCache,
    MarketDataService,
    PortfolioService,
    LedgerService,
)


def get_holding_repo(db: Session = Depends(get_db)) -> SqlAlchemyHoldingRepository:
    """Provide HoldingRepository instance."""
    return SqlAlchemyHoldingRepository(db)


def get_ledger_repo(db: Session = Depends(get_db)) -> SqlAlchemyLedgerRepository:
    """Provide LedgerRepository instance."""
    return SqlAlchemyLedgerRepository(db)


def get_market_provider(request: Request) -> MarketDataProvider:
    """Provide the provider constructed at startup."""
    return request.app.state.market_provider


def get_quote_cache(request: Request) -> QuoteCache:
    """Provide the process-wide quote cache constructed at startup."""
    return request.app.state.quote_cache


def get_market_data_service(
    provider: MarketDataProvider = Depends(get_market_provider),
    cache: QuoteCache = Depends(get_quote_cache),
) -> MarketDataService:
    """Provide MarketDataService instance."""
    return MarketDataService(
        provider=provider,
        cache=cache,
        history_max_points=get_settings().history_max_points,
    )


def get_portfolio_service(
    holding_repo: SqlAlchemyHoldingRepository = Depends(get_holding_repo),
    market_data_service: MarketDataService = Depends(get_market_data_service),
) -> PortfolioService:
    """Provide PortfolioService instance."""
    return PortfolioService(
        holding_repo=holding_repo,
        market_data_service=market_data_service,
        max_workers=get_settings().quote_max_workers,
    )


def get_ledger_service(
    ledger_repo: SqlAlchemyLedgerRepository = Depends(get_ledger_repo),
) -> LedgerService:
    """Provide LedgerService instance."""
    return LedgerService(ledger_repo=ledger_repo)


def get_csv_exporter(
    ledger_service: LedgerService = Depends(get_ledger_service),
) -> CsvExporter:
    """Provide CsvExporter instance."""
    return CsvExporter(ledger_service=ledger_service)
