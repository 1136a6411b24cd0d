"""Liquidation estimation service: fetch protocol state, then plan."""
from __future__ import annotations

import asyncio
import logging

from ..config import AppConfig
from ..constants import MAX_DEBT_TO_COVER
from ..errors import (
    CollateralCannotBeLiquidated,
    CurrencyNotBorrowed,
    InvalidReserveTerms,
)
from ..interfaces.price_oracle import PriceOracle
from ..interfaces.reserve_data import ReserveDataProvider
from ..models import (
    LiquidationEstimate,
    LiquidationRequest,
    ReserveConfig,
    ReserveTerms,
    UserReserve,
)
from ..oracles import PythOracle
from ..planner import plan
from ..providers import SnapshotProvider

logger = logging.getLogger(__name__)


def build_terms(reserve: ReserveConfig, prices: dict[str, int]) -> ReserveTerms:
    """Combine a reserve's configuration with its oracle price."""
    price = prices.get(reserve.symbol)
    if price is None:
        raise InvalidReserveTerms(f"No price available for {reserve.symbol}")
    return ReserveTerms(
        price=price,
        decimals=reserve.decimals,
        liquidation_bonus=reserve.liquidation_bonus,
        symbol=reserve.symbol,
    )


def check_eligibility(
    collateral_reserve: ReserveConfig,
    collateral_user: UserReserve,
    debt_reserve: ReserveConfig,
    debt_user: UserReserve,
) -> None:
    """Reject liquidations the protocol refuses regardless of health factor."""
    if collateral_reserve.liquidation_threshold <= 0:
        raise CollateralCannotBeLiquidated(
            f"{collateral_reserve.symbol} is not enabled as collateral"
        )
    if not collateral_user.use_as_collateral:
        raise CollateralCannotBeLiquidated(
            f"User does not use {collateral_reserve.symbol} as collateral"
        )
    if debt_user.position.stable_debt == 0 and debt_user.position.variable_debt == 0:
        raise CurrencyNotBorrowed(f"User has no {debt_reserve.symbol} debt")


def build_request(
    user: str,
    collateral_reserve: ReserveConfig,
    collateral_user: UserReserve,
    debt_reserve: ReserveConfig,
    debt_user: UserReserve,
    prices: dict[str, int],
    debt_to_cover: int = MAX_DEBT_TO_COVER,
    receive_collateral_token: bool = False,
) -> LiquidationRequest:
    """Assemble a LiquidationRequest from provider records."""
    return LiquidationRequest(
        collateral=build_terms(collateral_reserve, prices),
        collateral_position=collateral_user.position,
        debt=build_terms(debt_reserve, prices),
        debt_position=debt_user.position,
        debt_to_cover=debt_to_cover,
        receive_collateral_token=receive_collateral_token,
        collateral_available_liquidity=collateral_reserve.available_liquidity,
        user=user,
    )


class LiquidationEstimator:
    """Estimates liquidation calls against live or snapshot protocol state."""

    def __init__(self, provider: ReserveDataProvider, oracle: PriceOracle) -> None:
        self._provider = provider
        self._oracle = oracle

    @classmethod
    def from_config(cls, config: AppConfig) -> LiquidationEstimator:
        """Wire the snapshot provider and the configured price oracle."""
        snapshot = SnapshotProvider.from_file(config.snapshot.path)
        oracle: PriceOracle = snapshot
        if config.price_oracle.provider == "pyth":
            oracle = PythOracle(config.price_oracle.pyth, config.estimator.quote_decimals)
        return cls(snapshot, oracle)

    async def reserve_overview(self) -> list[tuple[ReserveConfig, int | None]]:
        """All reserves with their current price (None when unpriced)."""
        reserves = await self._provider.list_reserves()
        prices = await self._oracle.fetch_prices([r.symbol for r in reserves])
        return [(reserve, prices.get(reserve.symbol)) for reserve in reserves]

    async def estimate(
        self,
        user: str,
        collateral_symbol: str,
        debt_symbol: str,
        debt_to_cover: int = MAX_DEBT_TO_COVER,
        receive_collateral_token: bool = False,
    ) -> LiquidationEstimate:
        """Fetch state for both reserves and plan a liquidation of *user*."""
        (
            collateral_reserve,
            debt_reserve,
            collateral_user,
            debt_user,
            prices,
        ) = await asyncio.gather(
            self._provider.get_reserve(collateral_symbol),
            self._provider.get_reserve(debt_symbol),
            self._provider.get_user_position(user, collateral_symbol),
            self._provider.get_user_position(user, debt_symbol),
            self._oracle.fetch_prices([collateral_symbol, debt_symbol]),
        )
        logger.debug(
            "Fetched state for %s: %s=%s, %s=%s, prices=%s",
            user, collateral_symbol, collateral_user, debt_symbol, debt_user, prices,
        )

        check_eligibility(collateral_reserve, collateral_user, debt_reserve, debt_user)

        request = build_request(
            user,
            collateral_reserve,
            collateral_user,
            debt_reserve,
            debt_user,
            prices,
            debt_to_cover=debt_to_cover,
            receive_collateral_token=receive_collateral_token,
        )
        result = plan(request)

        logger.info(
            "Liquidation plan: %s · %s/%s · debt: %d  collateral: %d  outcome: %s",
            user,
            collateral_symbol,
            debt_symbol,
            result.actual_debt_to_liquidate,
            result.max_collateral_to_liquidate,
            result.outcome.value,
        )
        return LiquidationEstimate(request=request, plan=result)
