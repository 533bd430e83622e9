"""Pydantic schemas for API request/response."""

from finboard.api.schemas.common import MessageResponse
from finboard.api.schemas.transaction import (
    TransactionCreateRequest,
    TransactionUpdateRequest,
    TransactionOut,
    TransactionResponse,
    SummaryOut,
    TransactionListResponse,
    MonthlyTotalOut,
    CategoryTotalOut,
    StatsSummaryResponse,
)
from finboard.api.schemas.portfolio import (
    HoldingCreateRequest,
    HoldingUpdateRequest,
    HoldingOut,
    HoldingResponse,
    ValuedHoldingOut,
    PortfolioSummaryOut,
    PortfolioResponse,
)
from finboard.api.schemas.stock import (
    QuoteOut,
    PricePointOut,
    SymbolMatchOut,
    QuoteResponse,
    HistoryResponse,
    SearchResponse,
)

__all__ = [
    "MessageResponse",
    "TransactionCreateRequest",
    "TransactionUpdateRequest",
    "TransactionOut",
    "TransactionResponse",
    "SummaryOut",
    "TransactionListResponse",
    "MonthlyTotalOut",
    "CategoryTotalOut",
    "StatsSummaryResponse",
    "HoldingCreateRequest",
    "HoldingUpdateRequest",
    "HoldingOut",
    "HoldingResponse",
    "ValuedHoldingOut",
    "PortfolioSummaryOut",
    "PortfolioResponse",
    "QuoteOut",
    "PricePointOut",
    "SymbolMatchOut",
    "QuoteResponse",
    "HistoryResponse",
    "SearchResponse",
]
