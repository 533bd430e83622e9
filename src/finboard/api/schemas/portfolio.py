"""Pydantic schemas for portfolio endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, field_validator


def _clean_symbol(v: str) -> str:
    v = v.strip().upper()
    if not v:
        raise ValueError("Stock symbol is required")
    return v


class HoldingCreateRequest(BaseModel):
    """Request schema for a purchase; merges into an existing holding of the same symbol."""

    symbol: str = Field(..., min_length=1, max_length=20)
    shares: Decimal = Field(..., ge=0, description="Shares purchased")
    purchase_price: Decimal = Field(..., ge=0, description="Price paid per share")

    @field_validator("symbol")
    @classmethod
    def uppercase_symbol(cls, v: str) -> str:
        return _clean_symbol(v)


class HoldingUpdateRequest(BaseModel):
    """Request schema for updating a holding; omitted fields are kept."""

    symbol: Optional[str] = Field(default=None, max_length=20)
    shares: Optional[Decimal] = Field(default=None, ge=0)
    purchase_price: Optional[Decimal] = Field(default=None, ge=0)

    @field_validator("symbol")
    @classmethod
    def uppercase_symbol(cls, v: Optional[str]) -> Optional[str]:
        return _clean_symbol(v) if v is not None else None


class HoldingOut(BaseModel):
    """A stored holding. purchase_price is the average cost per share."""

    id: str
    symbol: str
    shares: float
    purchase_price: float
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class HoldingResponse(BaseModel):
    success: bool = True
    portfolio: HoldingOut


class ValuedHoldingOut(HoldingOut):
    """A holding with current market data; quote fields are null when unavailable."""

    current_price: Optional[float] = None
    current_value: Optional[float] = None
    investment_value: float
    gain_loss: Optional[float] = None
    gain_loss_percentage: Optional[float] = None


class PortfolioSummaryOut(BaseModel):
    total_value: float
    total_investment: float
    total_gain_loss: float
    total_gain_loss_percentage: float


class PortfolioResponse(BaseModel):
    success: bool = True
    portfolio: list[ValuedHoldingOut]
    summary: PortfolioSummaryOut
