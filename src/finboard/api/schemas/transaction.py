"""Pydantic schemas for transaction (ledger entry) endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from finboard.domain.models.enums import EntryKind


class TransactionCreateRequest(BaseModel):
    """Request schema for recording an income or expense."""

    type: EntryKind = Field(..., description="income or expense")
    category: str = Field(..., min_length=1, max_length=100)
    amount: Decimal = Field(..., ge=0, description="Non-negative amount; sign is implied by type")
    date: Optional[datetime] = Field(default=None, description="Defaults to now")
    description: Optional[str] = Field(default=None, max_length=500)

    @field_validator("category")
    @classmethod
    def category_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Category is required")
        return v


class TransactionUpdateRequest(BaseModel):
    """Request schema for updating a transaction; omitted fields are kept."""

    type: Optional[EntryKind] = None
    category: Optional[str] = Field(default=None, max_length=100)
    amount: Optional[Decimal] = Field(default=None, ge=0)
    date: Optional[datetime] = None
    description: Optional[str] = Field(default=None, max_length=500)

    @field_validator("category")
    @classmethod
    def category_not_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("Category cannot be empty")
        return v


class TransactionOut(BaseModel):
    """A single ledger entry."""

    id: str
    type: EntryKind
    category: str
    amount: float
    date: datetime
    description: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class TransactionResponse(BaseModel):
    success: bool = True
    transaction: TransactionOut


class SummaryOut(BaseModel):
    """Totals over the filtered set."""

    total_income: float
    total_expense: float
    net_balance: float


class TransactionListResponse(BaseModel):
    success: bool = True
    count: int
    transactions: list[TransactionOut]
    summary: SummaryOut


class MonthlyTotalOut(BaseModel):
    year: int
    month: int
    type: EntryKind
    total: float


class CategoryTotalOut(BaseModel):
    category: str
    type: EntryKind
    total: float


class StatsSummaryResponse(BaseModel):
    """Monthly and per-category breakdown over the trailing window."""

    success: bool = True
    months: int
    start_date: datetime
    monthly_data: list[MonthlyTotalOut]
    category_data: list[CategoryTotalOut]
