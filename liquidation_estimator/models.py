"""Data models, all frozen (immutable). Amounts are integers in smallest units."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True)
class AssetPosition:
    """A user's balances in one reserve."""

    collateral_balance: int = 0
    stable_debt: int = 0
    variable_debt: int = 0

    @property
    def total_debt(self) -> int:
        return self.stable_debt + self.variable_debt


@dataclass(frozen=True)
class ReserveTerms:
    """Price and liquidation parameters of one reserve.

    ``price`` is in the common quote unit, ``liquidation_bonus`` in basis
    points (10500 = 105%).
    """

    price: int
    decimals: int
    liquidation_bonus: int
    symbol: str = ""


@dataclass(frozen=True)
class LiquidationRequest:
    """Everything needed to plan one liquidation call."""

    collateral: ReserveTerms
    collateral_position: AssetPosition
    debt: ReserveTerms
    debt_position: AssetPosition
    debt_to_cover: int
    receive_collateral_token: bool = False
    collateral_available_liquidity: int = 0
    user: str = ""


@dataclass(frozen=True)
class CollateralQuote:
    """Collateral paid out for a debt amount, and the debt that justifies it."""

    collateral_amount: int
    debt_amount_needed: int


class PlanOutcome(Enum):
    OK = "ok"
    INSUFFICIENT_LIQUIDITY = "insufficient_liquidity"


@dataclass(frozen=True)
class LiquidationPlan:
    """Estimated result of a liquidation call."""

    actual_debt_to_liquidate: int
    max_collateral_to_liquidate: int
    outcome: PlanOutcome = PlanOutcome.OK

    @property
    def is_ok(self) -> bool:
        return self.outcome is PlanOutcome.OK


# ---------------------------------------------------------------------------
# Provider records
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ReserveConfig:
    """Reserve configuration as reported by a data provider."""

    symbol: str
    decimals: int
    liquidation_bonus: int
    liquidation_threshold: int
    available_liquidity: int = 0


@dataclass(frozen=True)
class UserReserve:
    """A user's balances in one reserve as reported by a data provider."""

    position: AssetPosition = field(default_factory=AssetPosition)
    use_as_collateral: bool = False


@dataclass(frozen=True)
class LiquidationEstimate:
    """A plan together with the request it was computed from."""

    request: LiquidationRequest
    plan: LiquidationPlan
