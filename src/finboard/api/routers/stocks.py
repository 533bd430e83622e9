"""Stock market data endpoints. All responses are served through the quote cache."""

from fastapi import APIRouter, Depends, Query

from finboard.api.auth import get_current_owner
from finboard.api.deps import get_market_data_service
from finboard.api.schemas import (
    QuoteOut,
    PricePointOut,
    SymbolMatchOut,
    QuoteResponse,
    HistoryResponse,
    SearchResponse,
)
from finboard.services import MarketDataService

router = APIRouter(
    prefix="/stocks",
    tags=["stocks"],
    dependencies=[Depends(get_current_owner)],
)


def _optional_float(value):
    return float(value) if value is not None else None


@router.get("/search/{query}", response_model=SearchResponse)
def search_stocks(
    query: str,
    market: MarketDataService = Depends(get_market_data_service),
) -> SearchResponse:
    """Search for stocks by symbol or name."""
    result = market.search_symbols(query)
    return SearchResponse(
        data=[
            SymbolMatchOut(
                symbol=m.symbol,
                name=m.name,
                type=m.type,
                region=m.region,
                currency=m.currency,
            )
            for m in result.value
        ],
        cached=result.cached,
    )


@router.get("/{symbol}", response_model=QuoteResponse)
def get_stock_quote(
    symbol: str,
    market: MarketDataService = Depends(get_market_data_service),
) -> QuoteResponse:
    """Get the current quote for a symbol."""
    result = market.get_quote(symbol)
    q = result.value
    return QuoteResponse(
        data=QuoteOut(
            symbol=q.symbol,
            price=float(q.price),
            change=_optional_float(q.change_absolute),
            change_percent=_optional_float(q.change_percent),
            high=_optional_float(q.day_high),
            low=_optional_float(q.day_low),
            open=_optional_float(q.open),
            volume=q.volume,
            previous_close=_optional_float(q.previous_close),
            as_of=q.as_of,
        ),
        cached=result.cached,
    )


@router.get("/{symbol}/history", response_model=HistoryResponse)
def get_stock_history(
    symbol: str,
    interval: str = Query("daily", description="daily, weekly or monthly"),
    market: MarketDataService = Depends(get_market_data_service),
) -> HistoryResponse:
    """Get a historical price series, oldest point first."""
    result = market.get_history(symbol, interval)
    return HistoryResponse(
        data=[
            PricePointOut(
                date=p.date,
                open=float(p.open),
                high=float(p.high),
                low=float(p.low),
                close=float(p.close),
                adjusted_close=_optional_float(p.adjusted_close),
                volume=p.volume,
            )
            for p in result.value
        ],
        cached=result.cached,
    )
