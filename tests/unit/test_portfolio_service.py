"""
Unit tests for PortfolioService.

Tests cover:
- Weighted-average merge of repeated purchases
- Valuation math and the zero-investment edge case
- Partial failure: holdings without a quote stay in the output
- Ownership-checked get/update/delete
"""

import pytest
from decimal import Decimal
from unittest.mock import MagicMock

import requests

from finboard.core.exceptions import ValidationError, NotFoundError, NotAuthorizedError
from finboard.domain.models import Holding
from finboard.domain.views import Quote
from finboard.providers import AlphaVantageProvider
from finboard.services import PortfolioService, MarketDataService, QuoteCache, HoldingUpdate
from finboard.services.portfolio_service import (
    weighted_cost_basis,
    value_holding,
    summarize_valuations,
)

from tests.conftest import (
    DeterministicMarketProvider,
    FailingMarketProvider,
    assert_decimal_equal,
    utc_datetime,
)

OWNER = "user-1"
OTHER = "user-2"


# =============================================================================
# PURE FUNCTIONS
# =============================================================================


class TestWeightedCostBasis:
    """Tests for the merge formula."""

    def test_two_equal_lots_average_price(self):
        """
        GIVEN 10 shares at 100
        WHEN 10 more are bought at 120
        THEN the cost basis is 110
        """
        assert weighted_cost_basis(
            Decimal("10"), Decimal("100"), Decimal("10"), Decimal("120")
        ) == Decimal("110")

    def test_unequal_lots(self):
        """
        GIVEN 3 shares at 10
        WHEN 1 more is bought at 30
        THEN the cost basis is (30 + 30) / 4 = 15
        """
        assert weighted_cost_basis(
            Decimal("3"), Decimal("10"), Decimal("1"), Decimal("30")
        ) == Decimal("15")

    def test_fractional_shares(self):
        """
        GIVEN 0.5 shares at 200
        WHEN 1.5 shares are bought at 100
        THEN the cost basis is (100 + 150) / 2 = 125
        """
        assert weighted_cost_basis(
            Decimal("0.5"), Decimal("200"), Decimal("1.5"), Decimal("100")
        ) == Decimal("125")

    def test_zero_total_keeps_old_basis(self):
        """
        GIVEN an empty position
        WHEN zero shares are added
        THEN the old cost basis is kept instead of dividing by zero
        """
        assert weighted_cost_basis(
            Decimal("0"), Decimal("42"), Decimal("0"), Decimal("99")
        ) == Decimal("42")


class TestValueHolding:
    """Tests for per-holding valuation."""

    def _holding(self, shares: str, cost_basis: str) -> Holding:
        return Holding(
            holding_id="h1",
            owner_id=OWNER,
            symbol="AAPL",
            shares=Decimal(shares),
            cost_basis=Decimal(cost_basis),
        )

    def _quote(self, price: str) -> Quote:
        return Quote(symbol="AAPL", price=Decimal(price), as_of=utc_datetime(2024, 6, 15))

    def test_gain(self):
        """
        GIVEN 20 shares at a cost basis of 110
        WHEN the quote is 130
        THEN value 2600, investment 2200, gain 400, gain pct 18.18
        """
        valuation = value_holding(self._holding("20", "110"), self._quote("130"))

        assert valuation.current_value == Decimal("2600.00")
        assert valuation.investment == Decimal("2200.00")
        assert valuation.gain_loss == Decimal("400.00")
        assert valuation.gain_loss_pct == Decimal("18.18")
        assert valuation.is_priced

    def test_loss(self):
        """
        GIVEN 10 shares at 50
        WHEN the quote is 40
        THEN the gain is -100 and -20%
        """
        valuation = value_holding(self._holding("10", "50"), self._quote("40"))

        assert valuation.gain_loss == Decimal("-100.00")
        assert valuation.gain_loss_pct == Decimal("-20.00")

    def test_zero_investment_pct_is_zero(self):
        """
        GIVEN a holding bought at 0
        WHEN it is valued
        THEN gain pct is defined as 0
        """
        valuation = value_holding(self._holding("5", "0"), self._quote("10"))

        assert valuation.investment == Decimal("0.00")
        assert valuation.gain_loss == Decimal("50.00")
        assert valuation.gain_loss_pct == Decimal("0")

    def test_no_quote_leaves_fields_null(self):
        """
        GIVEN no quote
        WHEN the holding is valued
        THEN only the investment is filled in
        """
        valuation = value_holding(self._holding("2", "10"), None)

        assert valuation.investment == Decimal("20.00")
        assert valuation.current_price is None
        assert valuation.current_value is None
        assert valuation.gain_loss is None
        assert valuation.gain_loss_pct is None
        assert not valuation.is_priced


class TestSummarizeValuations:

    def test_empty_is_all_zero(self):
        summary = summarize_valuations([])
        assert summary.total_value == 0
        assert summary.total_investment == 0
        assert summary.total_gain_loss == 0
        assert summary.total_gain_loss_pct == 0


# =============================================================================
# ADD / MERGE
# =============================================================================


class TestAddOrMergeHolding:
    """Tests for add_or_merge_holding."""

    def test_first_purchase_creates_holding(self, portfolio_service: PortfolioService):
        """
        GIVEN an empty portfolio
        WHEN 10 AAPL are bought at 100
        THEN a new holding is created
        """
        holding, created = portfolio_service.add_or_merge_holding(
            OWNER, "AAPL", Decimal("10"), Decimal("100")
        )

        assert created is True
        assert holding.symbol == "AAPL"
        assert holding.shares == Decimal("10")
        assert holding.cost_basis == Decimal("100")
        assert holding.created_at is not None

    def test_second_purchase_merges(self, portfolio_service: PortfolioService):
        """
        GIVEN 10 AAPL at 100
        WHEN 10 more are bought at 120
        THEN the same holding has 20 shares at 110
        """
        first, _ = portfolio_service.add_or_merge_holding(OWNER, "AAPL", Decimal("10"), Decimal("100"))
        merged, created = portfolio_service.add_or_merge_holding(
            OWNER, "AAPL", Decimal("10"), Decimal("120")
        )

        assert created is False
        assert merged.holding_id == first.holding_id
        assert merged.shares == Decimal("20")
        assert merged.cost_basis == Decimal("110")
        assert len(portfolio_service.list_holdings(OWNER)) == 1

    def test_shares_rounded_to_eight_places(self, portfolio_service: PortfolioService):
        """
        GIVEN purchases with more than eight decimal places of shares
        WHEN they are recorded and merged
        THEN shares are rounded to eight places before storage
        """
        holding, _ = portfolio_service.add_or_merge_holding(
            OWNER, "AAPL", Decimal("0.123456789"), Decimal("100")
        )
        assert holding.shares == Decimal("0.12345679")

        merged, _ = portfolio_service.add_or_merge_holding(
            OWNER, "AAPL", Decimal("0.000000004"), Decimal("100")
        )
        assert merged.shares == Decimal("0.12345679")
        assert merged.cost_basis == Decimal("100")

    def test_symbol_is_normalized_before_merge(self, portfolio_service: PortfolioService):
        """
        GIVEN a holding for AAPL
        WHEN " aapl " is bought
        THEN it merges into the AAPL holding
        """
        portfolio_service.add_or_merge_holding(OWNER, "AAPL", Decimal("1"), Decimal("100"))
        holding, created = portfolio_service.add_or_merge_holding(
            OWNER, " aapl ", Decimal("1"), Decimal("100")
        )

        assert created is False
        assert holding.shares == Decimal("2")

    def test_same_symbol_different_owners_are_separate(self, portfolio_service: PortfolioService):
        portfolio_service.add_or_merge_holding(OWNER, "AAPL", Decimal("1"), Decimal("100"))
        _, created = portfolio_service.add_or_merge_holding(OTHER, "AAPL", Decimal("1"), Decimal("100"))

        assert created is True
        assert len(portfolio_service.list_holdings(OWNER)) == 1
        assert len(portfolio_service.list_holdings(OTHER)) == 1

    @pytest.mark.parametrize("shares,price", [("-1", "100"), ("1", "-100")])
    def test_negative_inputs_rejected(self, portfolio_service: PortfolioService, shares, price):
        """
        GIVEN negative shares or price
        WHEN a purchase is recorded
        THEN ValidationError is raised and nothing is stored
        """
        with pytest.raises(ValidationError):
            portfolio_service.add_or_merge_holding(OWNER, "AAPL", Decimal(shares), Decimal(price))

        assert portfolio_service.list_holdings(OWNER) == []

    def test_empty_symbol_rejected(self, portfolio_service: PortfolioService):
        with pytest.raises(ValidationError):
            portfolio_service.add_or_merge_holding(OWNER, "  ", Decimal("1"), Decimal("1"))


# =============================================================================
# VALUATION
# =============================================================================


class TestValuePortfolio:
    """Tests for value_portfolio."""

    def test_worked_example(self, portfolio_service: PortfolioService):
        """
        GIVEN AAPL 10 @ 100 then 10 @ 120
        WHEN the portfolio is valued with AAPL at 130
        THEN value 2600, investment 2200, gain 400, about 18.18%
        """
        portfolio_service.add_or_merge_holding(OWNER, "AAPL", Decimal("10"), Decimal("100"))
        portfolio_service.add_or_merge_holding(OWNER, "AAPL", Decimal("10"), Decimal("120"))

        valuation = portfolio_service.value_portfolio(OWNER)

        assert len(valuation.holdings) == 1
        item = valuation.holdings[0]
        assert item.current_price == Decimal("130.00")
        assert item.current_value == Decimal("2600.00")
        assert item.investment == Decimal("2200.00")
        assert item.gain_loss == Decimal("400.00")
        assert_decimal_equal(item.gain_loss_pct, Decimal("18.18"))

        assert valuation.summary.total_value == Decimal("2600.00")
        assert valuation.summary.total_investment == Decimal("2200.00")
        assert valuation.summary.total_gain_loss == Decimal("400.00")
        assert valuation.summary.total_gain_loss_pct == Decimal("18.18")

    def test_empty_portfolio(self, portfolio_service: PortfolioService):
        valuation = portfolio_service.value_portfolio(OWNER)

        assert valuation.holdings == []
        assert valuation.summary.total_value == 0

    def test_failed_quote_keeps_holding_with_null_fields(
        self,
        holding_repo,
        quote_cache,
    ):
        """
        GIVEN holdings in AAPL and MSFT where the MSFT quote fails
        WHEN the portfolio is valued
        THEN both are returned, MSFT with null quote fields,
        AND the summary only counts AAPL
        """
        provider = DeterministicMarketProvider(failing_symbols=("MSFT",))
        service = PortfolioService(
            holding_repo=holding_repo,
            market_data_service=MarketDataService(provider=provider, cache=quote_cache),
        )
        service.add_or_merge_holding(OWNER, "AAPL", Decimal("10"), Decimal("100"))
        service.add_or_merge_holding(OWNER, "MSFT", Decimal("5"), Decimal("300"))

        valuation = service.value_portfolio(OWNER)

        by_symbol = {v.holding.symbol: v for v in valuation.holdings}
        assert set(by_symbol) == {"AAPL", "MSFT"}
        assert by_symbol["MSFT"].current_value is None
        assert by_symbol["MSFT"].investment == Decimal("1500.00")
        assert by_symbol["AAPL"].current_value == Decimal("1300.00")

        assert valuation.summary.total_value == Decimal("1300.00")
        assert valuation.summary.total_investment == Decimal("1000.00")
        assert valuation.summary.total_gain_loss == Decimal("300.00")

    def test_all_quotes_failing_still_returns_holdings(self, holding_repo, quote_cache):
        """
        GIVEN a provider that always fails
        WHEN the portfolio is valued
        THEN every holding is returned unpriced and the totals are zero
        """
        service = PortfolioService(
            holding_repo=holding_repo,
            market_data_service=MarketDataService(provider=FailingMarketProvider(), cache=quote_cache),
        )
        service.add_or_merge_holding(OWNER, "AAPL", Decimal("1"), Decimal("100"))
        service.add_or_merge_holding(OWNER, "TSLA", Decimal("1"), Decimal("200"))

        valuation = service.value_portfolio(OWNER)

        assert len(valuation.holdings) == 2
        assert all(not v.is_priced for v in valuation.holdings)
        assert valuation.summary.total_value == 0
        assert valuation.summary.total_investment == 0

    @pytest.mark.parametrize("api_key, exc", [
        (None, None),
        ("k", requests.Timeout("slow")),
        ("k", requests.ConnectionError("refused")),
    ])
    def test_alpha_vantage_failure_leaves_holding_unpriced(self, holding_repo, quote_cache, api_key, exc):
        """
        GIVEN an Alpha Vantage provider that is unconfigured or cannot be reached
        WHEN the portfolio is valued
        THEN the holding is returned with null quote fields and zero totals
        """
        session = MagicMock()
        session.get.side_effect = exc
        provider = AlphaVantageProvider(api_key=api_key, timeout_seconds=2.0, session=session)
        service = PortfolioService(
            holding_repo=holding_repo,
            market_data_service=MarketDataService(provider=provider, cache=quote_cache),
        )
        service.add_or_merge_holding(OWNER, "AAPL", Decimal("10"), Decimal("100"))

        valuation = service.value_portfolio(OWNER)

        assert len(valuation.holdings) == 1
        holding = valuation.holdings[0]
        assert holding.current_price is None
        assert holding.current_value is None
        assert holding.gain_loss is None
        assert holding.gain_loss_pct is None
        assert holding.investment == Decimal("1000.00")
        assert valuation.summary.total_value == 0
        assert valuation.summary.total_investment == 0
        assert valuation.summary.total_gain_loss == 0
        assert len(quote_cache) == 0

    def test_quotes_go_through_cache(
        self,
        portfolio_service: PortfolioService,
        deterministic_provider: DeterministicMarketProvider,
    ):
        """
        GIVEN one holding
        WHEN the portfolio is valued twice within the cache window
        THEN the provider is asked once
        """
        portfolio_service.add_or_merge_holding(OWNER, "AAPL", Decimal("1"), Decimal("100"))

        portfolio_service.value_portfolio(OWNER)
        portfolio_service.value_portfolio(OWNER)

        assert deterministic_provider.quote_calls == ["AAPL"]


# =============================================================================
# OWNERSHIP
# =============================================================================


class TestHoldingOwnership:
    """Tests for get/update/delete ownership checks."""

    def test_get_missing_is_not_found(self, portfolio_service: PortfolioService):
        with pytest.raises(NotFoundError):
            portfolio_service.get_holding(OWNER, "missing")

    def test_update_other_owner_is_not_authorized(self, portfolio_service: PortfolioService):
        """
        GIVEN a holding owned by user-1
        WHEN user-2 updates it
        THEN NotAuthorizedError is raised, not NotFoundError
        """
        holding, _ = portfolio_service.add_or_merge_holding(OWNER, "AAPL", Decimal("1"), Decimal("100"))

        with pytest.raises(NotAuthorizedError):
            portfolio_service.update_holding(OTHER, holding.holding_id, HoldingUpdate(shares=Decimal("5")))

        assert portfolio_service.get_holding(OWNER, holding.holding_id).shares == Decimal("1")

    def test_delete_other_owner_is_not_authorized(self, portfolio_service: PortfolioService):
        holding, _ = portfolio_service.add_or_merge_holding(OWNER, "AAPL", Decimal("1"), Decimal("100"))

        with pytest.raises(NotAuthorizedError):
            portfolio_service.delete_holding(OTHER, holding.holding_id)

        assert len(portfolio_service.list_holdings(OWNER)) == 1

    def test_update_shares_rounded_to_eight_places(self, portfolio_service: PortfolioService):
        holding, _ = portfolio_service.add_or_merge_holding(OWNER, "AAPL", Decimal("10"), Decimal("100"))

        updated = portfolio_service.update_holding(
            OWNER, holding.holding_id, HoldingUpdate(shares=Decimal("2.123456789"))
        )

        assert updated.shares == Decimal("2.12345679")

    def test_update_overwrites_supplied_fields_only(self, portfolio_service: PortfolioService):
        """
        GIVEN a holding of 10 AAPL at 100
        WHEN only shares are updated
        THEN shares change and the cost basis is kept
        """
        holding, _ = portfolio_service.add_or_merge_holding(OWNER, "AAPL", Decimal("10"), Decimal("100"))

        updated = portfolio_service.update_holding(
            OWNER, holding.holding_id, HoldingUpdate(shares=Decimal("7"))
        )

        assert updated.shares == Decimal("7")
        assert updated.cost_basis == Decimal("100")
        assert updated.updated_at is not None

    def test_update_symbol_clash_rejected(self, portfolio_service: PortfolioService):
        """
        GIVEN holdings in AAPL and MSFT
        WHEN AAPL is renamed to MSFT
        THEN ValidationError is raised
        """
        aapl, _ = portfolio_service.add_or_merge_holding(OWNER, "AAPL", Decimal("1"), Decimal("100"))
        portfolio_service.add_or_merge_holding(OWNER, "MSFT", Decimal("1"), Decimal("100"))

        with pytest.raises(ValidationError):
            portfolio_service.update_holding(OWNER, aapl.holding_id, HoldingUpdate(symbol="msft"))

    def test_delete_removes_holding(self, portfolio_service: PortfolioService):
        holding, _ = portfolio_service.add_or_merge_holding(OWNER, "AAPL", Decimal("1"), Decimal("100"))

        portfolio_service.delete_holding(OWNER, holding.holding_id)

        with pytest.raises(NotFoundError):
            portfolio_service.get_holding(OWNER, holding.holding_id)
