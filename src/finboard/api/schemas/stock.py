"""Pydantic schemas for stock market data endpoints."""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel


class QuoteOut(BaseModel):
    symbol: str
    price: float
    change: Optional[float] = None
    change_percent: Optional[float] = None
    high: Optional[float] = None
    low: Optional[float] = None
    open: Optional[float] = None
    volume: Optional[int] = None
    previous_close: Optional[float] = None
    as_of: datetime


class PricePointOut(BaseModel):
    date: date
    open: float
    high: float
    low: float
    close: float
    adjusted_close: Optional[float] = None
    volume: Optional[int] = None


class SymbolMatchOut(BaseModel):
    symbol: str
    name: str
    type: Optional[str] = None
    region: Optional[str] = None
    currency: Optional[str] = None


class QuoteResponse(BaseModel):
    success: bool = True
    data: QuoteOut
    cached: bool


class HistoryResponse(BaseModel):
    success: bool = True
    data: list[PricePointOut]
    cached: bool


class SearchResponse(BaseModel):
    success: bool = True
    data: list[SymbolMatchOut]
    cached: bool
