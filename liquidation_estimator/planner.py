"""Liquidation planner: close-factor capping and collateral re-capping.

Given a snapshot of both reserves and the user's balances, ``plan`` returns
the debt a liquidation call would actually repay and the collateral it would
pay out. Pure function; no I/O, no logging, no shared state.
"""
from __future__ import annotations

from .calculator import convert
from .constants import CLOSE_FACTOR_BPS
from .errors import InvalidLiquidationRequest
from .fixed_point import checked_add, percent_mul
from .models import LiquidationPlan, LiquidationRequest, PlanOutcome


def _check_non_negative(request: LiquidationRequest) -> None:
    amounts = {
        "debt_to_cover": request.debt_to_cover,
        "collateral_available_liquidity": request.collateral_available_liquidity,
        "collateral_balance": request.collateral_position.collateral_balance,
        "stable_debt": request.debt_position.stable_debt,
        "variable_debt": request.debt_position.variable_debt,
    }
    for name, value in amounts.items():
        if value < 0:
            raise InvalidLiquidationRequest(f"{name} must be non-negative, got {value}")


def max_liquidatable_debt(request: LiquidationRequest) -> int:
    """Close-factor share of the user's total debt in the debt asset."""
    position = request.debt_position
    total_debt = checked_add(position.stable_debt, position.variable_debt)
    return percent_mul(total_debt, CLOSE_FACTOR_BPS)


def plan(request: LiquidationRequest) -> LiquidationPlan:
    """Estimate the debt repaid and collateral received for *request*.

    ``debt_to_cover`` may be ``MAX_DEBT_TO_COVER``; it is capped at the close
    factor like any other amount. When the user's collateral cannot pay for
    the capped debt at the bonus rate, the debt is lowered to what the
    collateral covers.
    """
    _check_non_negative(request)

    actual_debt = min(request.debt_to_cover, max_liquidatable_debt(request))

    quote = convert(
        request.collateral,
        request.debt,
        actual_debt,
        request.collateral_position.collateral_balance,
    )
    if quote.debt_amount_needed < actual_debt:
        actual_debt = quote.debt_amount_needed

    outcome = PlanOutcome.OK
    if (
        not request.receive_collateral_token
        and request.collateral_available_liquidity < quote.collateral_amount
    ):
        outcome = PlanOutcome.INSUFFICIENT_LIQUIDITY

    return LiquidationPlan(
        actual_debt_to_liquidate=actual_debt,
        max_collateral_to_liquidate=quote.collateral_amount,
        outcome=outcome,
    )
