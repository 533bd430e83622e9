"""Portfolio service: holdings CRUD, weighted-average merge and valuation."""

import logging
import uuid
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from finboard.core.exceptions import QuoteUnavailableError, ValidationError
from finboard.core.timezone import now_utc
from finboard.domain.models import Holding
from finboard.domain.views import (
    HoldingValuation,
    PortfolioSummary,
    PortfolioValuation,
    Quote,
)
from finboard.repositories.protocols import HoldingRepository
from finboard.services.access_control import load_owned
from finboard.services.market_data_service import MarketDataService, normalize_symbol

logger = logging.getLogger(__name__)

_CENT = Decimal("0.01")
_COST_BASIS_PLACES = Decimal("0.000001")
_SHARE_PLACES = Decimal("0.00000001")


@dataclass
class HoldingUpdate:
    """Fields to overwrite on an existing holding; None leaves a field unchanged."""

    symbol: Optional[str] = None
    shares: Optional[Decimal] = None
    cost_basis: Optional[Decimal] = None


def weighted_cost_basis(
    old_shares: Decimal,
    old_cost_basis: Decimal,
    added_shares: Decimal,
    price: Decimal,
) -> Decimal:
    """
    Average price per share after buying added_shares at price.

    Uses the explicit pre-merge share count. When the combined position is
    zero shares the old cost basis is kept.
    """
    total_shares = old_shares + added_shares
    if total_shares == 0:
        return old_cost_basis
    total_cost = old_cost_basis * old_shares + price * added_shares
    return (total_cost / total_shares).quantize(_COST_BASIS_PLACES)


def value_holding(holding: Holding, quote: Optional[Quote]) -> HoldingValuation:
    """
    Compute current value and unrealized gain/loss for one holding.

    Without a quote, only the investment is filled in.
    """
    investment = (holding.shares * holding.cost_basis).quantize(_CENT)
    if quote is None:
        return HoldingValuation(holding=holding, investment=investment)

    current_value = (holding.shares * quote.price).quantize(_CENT)
    gain_loss = current_value - investment
    if investment == 0:
        gain_loss_pct = Decimal("0")
    else:
        gain_loss_pct = (gain_loss / investment * 100).quantize(_CENT)

    return HoldingValuation(
        holding=holding,
        investment=investment,
        current_price=quote.price,
        current_value=current_value,
        gain_loss=gain_loss,
        gain_loss_pct=gain_loss_pct,
        quote_as_of=quote.as_of,
    )


def summarize_valuations(valuations: list[HoldingValuation]) -> PortfolioSummary:
    """Aggregate over priced holdings only."""
    summary = PortfolioSummary()
    for valuation in valuations:
        if not valuation.is_priced:
            continue
        summary.total_value += valuation.current_value
        summary.total_investment += valuation.investment

    summary.total_gain_loss = summary.total_value - summary.total_investment
    if summary.total_investment > 0:
        summary.total_gain_loss_pct = (
            summary.total_gain_loss / summary.total_investment * 100
        ).quantize(_CENT)
    return summary


class PortfolioService:
    """
    Service for a user's stock holdings.

    Holdings are keyed by (owner, symbol); repeated purchases merge into the
    existing row. Valuation fetches one quote per holding concurrently and
    tolerates per-symbol quote failures.
    """

    def __init__(
        self,
        holding_repo: HoldingRepository,
        market_data_service: MarketDataService,
        max_workers: int = 8,
    ):
        self._holdings = holding_repo
        self._market = market_data_service
        self._max_workers = max_workers

    def add_or_merge_holding(
        self,
        owner_id: str,
        symbol: str,
        shares: Decimal,
        price: Decimal,
    ) -> tuple[Holding, bool]:
        """
        Record a purchase of shares at price.

        Returns (holding, created) where created is False when the purchase
        was merged into an existing holding.
        """
        symbol = normalize_symbol(symbol)
        if shares < 0:
            raise ValidationError("Shares cannot be negative")
        if price < 0:
            raise ValidationError("Price cannot be negative")
        shares = shares.quantize(_SHARE_PLACES)

        existing = self._holdings.get_by_owner_and_symbol(owner_id, symbol)
        if existing:
            old_shares = existing.shares
            existing.cost_basis = weighted_cost_basis(
                old_shares, existing.cost_basis, shares, price
            )
            existing.shares = old_shares + shares
            existing.updated_at = now_utc()
            logger.info("Merged %s shares of %s into holding %s", shares, symbol, existing.holding_id)
            return self._holdings.update(existing), False

        holding = Holding(
            holding_id=str(uuid.uuid4()),
            owner_id=owner_id,
            symbol=symbol,
            shares=shares,
            cost_basis=price.quantize(_COST_BASIS_PLACES),
            created_at=now_utc(),
        )
        return self._holdings.create(holding), True

    def list_holdings(self, owner_id: str) -> list[Holding]:
        """List the owner's holdings ordered by symbol."""
        return self._holdings.list_by_owner(owner_id)

    def get_holding(self, owner_id: str, holding_id: str) -> Holding:
        """Get a holding the caller owns."""
        return load_owned(self._holdings.get_by_id(holding_id), owner_id, "Holding", holding_id)

    def update_holding(self, owner_id: str, holding_id: str, patch: HoldingUpdate) -> Holding:
        """Overwrite the supplied fields of a holding the caller owns."""
        holding = self.get_holding(owner_id, holding_id)

        if patch.symbol is not None:
            symbol = normalize_symbol(patch.symbol)
            if symbol != holding.symbol:
                clash = self._holdings.get_by_owner_and_symbol(owner_id, symbol)
                if clash:
                    raise ValidationError(f"A holding for {symbol} already exists")
            holding.symbol = symbol
        if patch.shares is not None:
            if patch.shares < 0:
                raise ValidationError("Shares cannot be negative")
            holding.shares = patch.shares.quantize(_SHARE_PLACES)
        if patch.cost_basis is not None:
            if patch.cost_basis < 0:
                raise ValidationError("Price cannot be negative")
            holding.cost_basis = patch.cost_basis.quantize(_COST_BASIS_PLACES)

        holding.updated_at = now_utc()
        return self._holdings.update(holding)

    def delete_holding(self, owner_id: str, holding_id: str) -> None:
        """Hard-delete a holding the caller owns."""
        holding = self.get_holding(owner_id, holding_id)
        self._holdings.delete(holding.holding_id)

    def value_portfolio(self, owner_id: str) -> PortfolioValuation:
        """
        Value every holding at current prices.

        A holding whose quote cannot be obtained is still returned, with null
        quote-derived fields, and is excluded from the summary totals.
        """
        holdings = self._holdings.list_by_owner(owner_id)
        if not holdings:
            return PortfolioValuation()

        symbols = sorted({h.symbol for h in holdings})
        workers = max(1, min(self._max_workers, len(symbols)))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            quotes = dict(zip(symbols, executor.map(self._quote_or_none, symbols)))

        valuations = [value_holding(h, quotes.get(h.symbol)) for h in holdings]
        return PortfolioValuation(
            holdings=valuations,
            summary=summarize_valuations(valuations),
        )

    def _quote_or_none(self, symbol: str) -> Optional[Quote]:
        try:
            return self._market.get_quote(symbol).value
        except QuoteUnavailableError as exc:
            logger.warning("Error fetching price for %s: %s", symbol, exc.reason)
            return None
