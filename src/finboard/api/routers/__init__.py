"""API routers package."""

from finboard.api.routers.transactions import router as transactions_router
from finboard.api.routers.portfolio import router as portfolio_router
from finboard.api.routers.stocks import router as stocks_router

__all__ = [
    "transactions_router",
    "portfolio_router",
    "stocks_router",
]
