"""Unit tests for the liquidation planner."""
from __future__ import annotations

from dataclasses import replace

import pytest

from liquidation_estimator.constants import MAX_DEBT_TO_COVER
from liquidation_estimator.errors import (
    ArithmeticOverflow,
    InvalidLiquidationRequest,
    InvalidReserveTerms,
)
from liquidation_estimator.models import AssetPosition, LiquidationPlan, PlanOutcome
from liquidation_estimator.planner import max_liquidatable_debt, plan

COVER_AMOUNTS = [0, 1, 19, 100, 190, 191, 499, 500, 501, 10_000, MAX_DEBT_TO_COVER]


class TestCloseFactor:
    def test_half_of_stable_debt(self, make_request) -> None:
        assert max_liquidatable_debt(make_request()) == 500

    def test_stable_and_variable_debt_combined(self, make_request) -> None:
        request = make_request(stable_debt=600, variable_debt=400)
        assert max_liquidatable_debt(request) == 500

    def test_rounds_down(self, make_request) -> None:
        assert max_liquidatable_debt(make_request(stable_debt=1001)) == 500

    def test_total_debt_overflow(self, make_request) -> None:
        request = make_request(stable_debt=2**255, variable_debt=2**255)
        with pytest.raises(ArithmeticOverflow, match="addition"):
            plan(request)


class TestScenarios:
    def test_max_cover_with_ample_collateral(self, make_request) -> None:
        result = plan(make_request(collateral_balance=525))
        assert result == LiquidationPlan(
            actual_debt_to_liquidate=500,
            max_collateral_to_liquidate=525,
            outcome=PlanOutcome.OK,
        )

    def test_collateral_is_the_binding_constraint(self, make_request) -> None:
        result = plan(make_request(collateral_balance=200))
        assert result.max_collateral_to_liquidate == 200
        assert result.actual_debt_to_liquidate == 190

    def test_partial_cover_below_close_factor(self, make_request) -> None:
        result = plan(make_request(debt_to_cover=100))
        assert result.actual_debt_to_liquidate == 100
        assert result.max_collateral_to_liquidate == 105

    def test_sentinel_equals_explicit_close_factor(self, make_request) -> None:
        assert plan(make_request()) == plan(make_request(debt_to_cover=500))

    def test_zero_collateral_collapses_plan(self, make_request) -> None:
        result = plan(make_request(collateral_balance=0))
        assert result.actual_debt_to_liquidate == 0
        assert result.max_collateral_to_liquidate == 0
        assert result.is_ok

    def test_zero_debt(self, make_request) -> None:
        result = plan(make_request(stable_debt=0))
        assert result.actual_debt_to_liquidate == 0
        assert result.max_collateral_to_liquidate == 0


class TestLiquidityCheck:
    def test_underlying_withdrawal_without_liquidity(self, make_request) -> None:
        request = make_request(
            receive_collateral_token=False, collateral_available_liquidity=524
        )
        result = plan(request)
        assert result.outcome is PlanOutcome.INSUFFICIENT_LIQUIDITY
        assert not result.is_ok
        # amounts are still reported
        assert result.actual_debt_to_liquidate == 500
        assert result.max_collateral_to_liquidate == 525

    def test_underlying_withdrawal_with_exact_liquidity(self, make_request) -> None:
        request = make_request(
            receive_collateral_token=False, collateral_available_liquidity=525
        )
        assert plan(request).outcome is PlanOutcome.OK

    def test_receiving_collateral_token_skips_check(self, make_request) -> None:
        request = make_request(
            receive_collateral_token=True, collateral_available_liquidity=0
        )
        assert plan(request).outcome is PlanOutcome.OK

    def test_check_uses_capped_collateral(self, make_request) -> None:
        request = make_request(
            collateral_balance=200,
            receive_collateral_token=False,
            collateral_available_liquidity=200,
        )
        assert plan(request).outcome is PlanOutcome.OK


class TestProperties:
    @pytest.mark.parametrize("cover", COVER_AMOUNTS)
    @pytest.mark.parametrize("balance", [0, 50, 200, 525, 10_000])
    def test_bounds(self, make_request, cover: int, balance: int) -> None:
        result = plan(make_request(collateral_balance=balance, debt_to_cover=cover))
        assert result.actual_debt_to_liquidate <= min(cover, 1000 // 2)
        assert result.max_collateral_to_liquidate <= balance
        assert result.actual_debt_to_liquidate >= 0
        assert result.max_collateral_to_liquidate >= 0

    @pytest.mark.parametrize("balance", [0, 50, 200, 525, 10_000])
    def test_monotonic_in_debt_to_cover(self, make_request, balance: int) -> None:
        results = [
            plan(make_request(collateral_balance=balance, debt_to_cover=cover))
            for cover in COVER_AMOUNTS
        ]
        for prev, curr in zip(results, results[1:]):
            assert curr.max_collateral_to_liquidate >= prev.max_collateral_to_liquidate
            if curr.max_collateral_to_liquidate < balance:
                assert curr.actual_debt_to_liquidate >= prev.actual_debt_to_liquidate

    def test_debt_is_constant_once_collateral_caps(self, make_request) -> None:
        capped = {
            plan(make_request(collateral_balance=200, debt_to_cover=cover))
            for cover in (300, 499, 500, MAX_DEBT_TO_COVER)
        }
        assert capped == {LiquidationPlan(190, 200, PlanOutcome.OK)}

    def test_cap_boundary_keeps_back_calculated_debt(self, make_request) -> None:
        # 191 * 1.05 = 200.55 -> 200 fits the balance exactly, no re-cap
        exact = plan(make_request(collateral_balance=200, debt_to_cover=191))
        assert (exact.actual_debt_to_liquidate, exact.max_collateral_to_liquidate) == (191, 200)
        # past the balance the debt is derived from 200 / 1.05 = 190.47 -> 190
        capped = plan(make_request(collateral_balance=200, debt_to_cover=192))
        assert (capped.actual_debt_to_liquidate, capped.max_collateral_to_liquidate) == (190, 200)

    def test_idempotent(self, make_request) -> None:
        request = make_request(collateral_balance=200, receive_collateral_token=False)
        snapshot = replace(request)
        assert plan(request) == plan(request)
        assert request == snapshot


class TestFailures:
    @pytest.mark.parametrize(
        "overrides",
        [
            {"debt_to_cover": -1},
            {"collateral_available_liquidity": -1},
            {"collateral_position": AssetPosition(collateral_balance=-1)},
            {"debt_position": AssetPosition(stable_debt=-1)},
            {"debt_position": AssetPosition(variable_debt=-5)},
        ],
    )
    def test_negative_amounts(self, make_request, overrides: dict) -> None:
        with pytest.raises(InvalidLiquidationRequest):
            plan(make_request(**overrides))

    def test_forward_overflow(self, make_request, debt_terms) -> None:
        request = make_request(
            stable_debt=2**255,
            debt=replace(debt_terms, price=2**255),
        )
        with pytest.raises(ArithmeticOverflow, match="multiplication"):
            plan(request)

    def test_invalid_price_propagates(self, make_request, collateral_terms) -> None:
        with pytest.raises(InvalidReserveTerms):
            plan(make_request(collateral=replace(collateral_terms, price=0)))
