"""Portfolio endpoints: holdings CRUD and valuation."""

from fastapi import APIRouter, Depends, Response, status

from finboard.api.auth import get_current_owner
from finboard.api.deps import get_portfolio_service
from finboard.api.schemas import (
    MessageResponse,
    HoldingCreateRequest,
    HoldingUpdateRequest,
    HoldingOut,
    HoldingResponse,
    ValuedHoldingOut,
    PortfolioSummaryOut,
    PortfolioResponse,
)
from finboard.domain.models import Holding
from finboard.domain.views import HoldingValuation
from finboard.services import PortfolioService, HoldingUpdate

router = APIRouter(prefix="/portfolio", tags=["portfolio"])


def _optional_float(value):
    return float(value) if value is not None else None


def _holding_to_out(holding: Holding) -> HoldingOut:
    return HoldingOut(
        id=holding.holding_id,
        symbol=holding.symbol,
        shares=float(holding.shares),
        purchase_price=float(holding.cost_basis),
        created_at=holding.created_at,
        updated_at=holding.updated_at,
    )


def _valuation_to_out(valuation: HoldingValuation) -> ValuedHoldingOut:
    return ValuedHoldingOut(
        **_holding_to_out(valuation.holding).model_dump(),
        current_price=_optional_float(valuation.current_price),
        current_value=_optional_float(valuation.current_value),
        investment_value=float(valuation.investment),
        gain_loss=_optional_float(valuation.gain_loss),
        gain_loss_percentage=_optional_float(valuation.gain_loss_pct),
    )


@router.post("", response_model=HoldingResponse, status_code=201)
def add_holding(
    data: HoldingCreateRequest,
    response: Response,
    owner_id: str = Depends(get_current_owner),
    portfolio: PortfolioService = Depends(get_portfolio_service),
) -> HoldingResponse:
    """
    Record a stock purchase.

    Returns 201 for a new holding, 200 when merged into an existing one.
    """
    holding, created = portfolio.add_or_merge_holding(
        owner_id,
        symbol=data.symbol,
        shares=data.shares,
        price=data.purchase_price,
    )
    if not created:
        response.status_code = status.HTTP_200_OK
    return HoldingResponse(portfolio=_holding_to_out(holding))


@router.get("", response_model=PortfolioResponse)
def get_portfolio(
    owner_id: str = Depends(get_current_owner),
    portfolio: PortfolioService = Depends(get_portfolio_service),
) -> PortfolioResponse:
    """Holdings enriched with current prices, plus an aggregate summary."""
    valuation = portfolio.value_portfolio(owner_id)
    summary = valuation.summary
    return PortfolioResponse(
        portfolio=[_valuation_to_out(v) for v in valuation.holdings],
        summary=PortfolioSummaryOut(
            total_value=float(summary.total_value),
            total_investment=float(summary.total_investment),
            total_gain_loss=float(summary.total_gain_loss),
            total_gain_loss_percentage=float(summary.total_gain_loss_pct),
        ),
    )


@router.get("/{holding_id}", response_model=HoldingResponse)
def get_holding(
    holding_id: str,
    owner_id: str = Depends(get_current_owner),
    portfolio: PortfolioService = Depends(get_portfolio_service),
) -> HoldingResponse:
    """Get a single holding."""
    return HoldingResponse(portfolio=_holding_to_out(portfolio.get_holding(owner_id, holding_id)))


@router.put("/{holding_id}", response_model=HoldingResponse)
def update_holding(
    holding_id: str,
    data: HoldingUpdateRequest,
    owner_id: str = Depends(get_current_owner),
    portfolio: PortfolioService = Depends(get_portfolio_service),
) -> HoldingResponse:
    """Update a holding; omitted fields are kept."""
    holding = portfolio.update_holding(
        owner_id,
        holding_id,
        HoldingUpdate(
            symbol=data.symbol,
            shares=data.shares,
            cost_basis=data.purchase_price,
        ),
    )
    return HoldingResponse(portfolio=_holding_to_out(holding))


@router.delete("/{holding_id}", response_model=MessageResponse)
def delete_holding(
    holding_id: str,
    owner_id: str = Depends(get_current_owner),
    portfolio: PortfolioService = Depends(get_portfolio_service),
) -> MessageResponse:
    """Delete a holding."""
    portfolio.delete_holding(owner_id, holding_id)
    return MessageResponse(message="Portfolio item deleted")
