"""Off-chain estimator for lending-protocol liquidation calls."""
from .calculator import convert
from .constants import CLOSE_FACTOR_BPS, MAX_DEBT_TO_COVER
from .errors import (
    ArithmeticOverflow,
    InvalidLiquidationRequest,
    InvalidReserveTerms,
    LiquidationError,
)
from .models import (
    AssetPosition,
    CollateralQuote,
    LiquidationPlan,
    LiquidationRequest,
    PlanOutcome,
    ReserveTerms,
)
from .planner import plan

__all__ = [
    "ArithmeticOverflow",
    "AssetPosition",
    "CLOSE_FACTOR_BPS",
    "CollateralQuote",
    "InvalidLiquidationRequest",
    "InvalidReserveTerms",
    "LiquidationError",
    "LiquidationPlan",
    "LiquidationRequest",
    "MAX_DEBT_TO_COVER",
    "PlanOutcome",
    "ReserveTerms",
    "convert",
    "plan",
]
