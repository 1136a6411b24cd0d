"""Collateral calculator: debt amount <-> bonus-adjusted collateral amount.

Pure integer math, no I/O. Multiplications happen before divisions and every
division truncates, so results match the protocol's own numbers exactly.
"""
from __future__ import annotations

from .constants import MAX_DECIMALS, MIN_LIQUIDATION_BONUS
from .errors import InvalidReserveTerms
from .fixed_point import checked_div, mul_all, percent_div, percent_mul, pow10
from .models import CollateralQuote, ReserveTerms


def validate_terms(terms: ReserveTerms) -> None:
    """Raise ``InvalidReserveTerms`` if *terms* cannot be used as a divisor."""
    name = terms.symbol or "reserve"
    if terms.price <= 0:
        raise InvalidReserveTerms(f"{name}: price must be positive, got {terms.price}")
    if not 0 <= terms.decimals <= MAX_DECIMALS:
        raise InvalidReserveTerms(
            f"{name}: decimals must be within 0..{MAX_DECIMALS}, got {terms.decimals}"
        )
    if terms.liquidation_bonus < MIN_LIQUIDATION_BONUS:
        raise InvalidReserveTerms(
            f"{name}: liquidation bonus must be >= {MIN_LIQUIDATION_BONUS}, "
            f"got {terms.liquidation_bonus}"
        )


def collateral_for_debt(
    collateral: ReserveTerms, debt: ReserveTerms, debt_amount: int
) -> int:
    """Collateral (bonus included) paid out for repaying *debt_amount*.

    debt.price * debt_amount * 10^collateral.decimals * bonus / 10000
        / (collateral.price * 10^debt.decimals)
    """
    numerator = mul_all(debt.price, debt_amount, pow10(collateral.decimals))
    numerator = percent_mul(numerator, collateral.liquidation_bonus)
    return checked_div(numerator, mul_all(collateral.price, pow10(debt.decimals)))


def debt_for_collateral(
    collateral: ReserveTerms, debt: ReserveTerms, collateral_amount: int
) -> int:
    """Debt that justifies paying out *collateral_amount* at the bonus rate.

    The bonus is removed with a percentage divide, not by inverting
    ``collateral_for_debt``; the two round differently.
    """
    value = checked_div(
        mul_all(collateral.price, collateral_amount, pow10(debt.decimals)),
        mul_all(debt.price, pow10(collateral.decimals)),
    )
    return percent_div(value, collateral.liquidation_bonus)


def convert(
    collateral: ReserveTerms,
    debt: ReserveTerms,
    debt_to_cover: int,
    user_collateral_balance: int,
) -> CollateralQuote:
    """Convert *debt_to_cover* into collateral, capped by the user's balance.

    Returns the collateral amount and the debt amount actually needed for it,
    which is below *debt_to_cover* only when the balance is the binding cap.
    """
    validate_terms(collateral)
    validate_terms(debt)

    max_collateral = collateral_for_debt(collateral, debt, debt_to_cover)
    if max_collateral > user_collateral_balance:
        return CollateralQuote(
            collateral_amount=user_collateral_balance,
            debt_amount_needed=debt_for_collateral(
                collateral, debt, user_collateral_balance
            ),
        )
    return CollateralQuote(
        collateral_amount=max_collateral, debt_amount_needed=debt_to_cover
    )
