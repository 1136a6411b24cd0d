"""Shared test fixtures and sample data."""
from __future__ import annotations

import textwrap
from dataclasses import replace
from pathlib import Path

import pytest

from liquidation_estimator.constants import MAX_DEBT_TO_COVER
from liquidation_estimator.models import (
    AssetPosition,
    LiquidationRequest,
    ReserveConfig,
    ReserveTerms,
    UserReserve,
)

WAD = 10**18


# ---------------------------------------------------------------------------
# Core model fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def collateral_terms() -> ReserveTerms:
    return ReserveTerms(price=10**8, decimals=18, liquidation_bonus=10500, symbol="WETH")


@pytest.fixture()
def debt_terms() -> ReserveTerms:
    return ReserveTerms(price=10**8, decimals=18, liquidation_bonus=10500, symbol="DAI")


@pytest.fixture()
def make_request(collateral_terms: ReserveTerms, debt_terms: ReserveTerms):
    """Factory for the equal-price, equal-decimals scenario.

    User owes 1000 stable debt; keyword arguments override request fields.
    """

    def _make(
        collateral_balance: int = 10_000,
        stable_debt: int = 1000,
        variable_debt: int = 0,
        **overrides,
    ) -> LiquidationRequest:
        request = LiquidationRequest(
            collateral=collateral_terms,
            collateral_position=AssetPosition(collateral_balance=collateral_balance),
            debt=debt_terms,
            debt_position=AssetPosition(
                stable_debt=stable_debt, variable_debt=variable_debt
            ),
            debt_to_cover=MAX_DEBT_TO_COVER,
            receive_collateral_token=True,
            collateral_available_liquidity=0,
            user="0xUSER",
        )
        return replace(request, **overrides)

    return _make


# ---------------------------------------------------------------------------
# Provider record fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def weth_reserve() -> ReserveConfig:
    return ReserveConfig(
        symbol="WETH",
        decimals=18,
        liquidation_bonus=10500,
        liquidation_threshold=8250,
        available_liquidity=1000 * WAD,
    )


@pytest.fixture()
def usdc_reserve() -> ReserveConfig:
    return ReserveConfig(
        symbol="USDC",
        decimals=6,
        liquidation_bonus=10450,
        liquidation_threshold=8800,
        available_liquidity=5_000_000 * 10**6,
    )


@pytest.fixture()
def weth_collateral() -> UserReserve:
    return UserReserve(
        position=AssetPosition(collateral_balance=5 * WAD), use_as_collateral=True
    )


@pytest.fixture()
def usdc_debt() -> UserReserve:
    return UserReserve(
        position=AssetPosition(stable_debt=3000 * 10**6, variable_debt=6000 * 10**6)
    )


@pytest.fixture()
def sample_prices() -> dict[str, int]:
    # quote_decimals = 8
    return {"WETH": 2000 * 10**8, "USDC": 10**8, "WBTC": 60_000 * 10**8}


# ---------------------------------------------------------------------------
# YAML fixtures
# ---------------------------------------------------------------------------

SAMPLE_SNAPSHOT_YAML = textwrap.dedent("""\
    reserves:
      WETH:
        decimals: 18
        liquidation_bonus: 10500
        liquidation_threshold: 8250
        available_liquidity: 1000000000000000000000
        price: 200000000000
      USDC:
        decimals: 6
        liquidation_bonus: 10450
        liquidation_threshold: 8800
        available_liquidity: 5000000000000
        price: 100000000
      GHO:
        decimals: 18
        liquidation_bonus: 10000
        liquidation_threshold: 0
    users:
      "0xAbC":
        WETH:
          collateral_balance: 5000000000000000000
          use_as_collateral: true
        USDC:
          stable_debt: 3000000000
          variable_debt: 6000000000
""")

SAMPLE_CONFIG_YAML = textwrap.dedent("""\
    estimator:
      quote_decimals: 8
    snapshot:
      path: snapshot.yaml
    price_oracle:
      provider: snapshot
      pyth:
        hermes_url: "https://hermes.example.com"
        feeds: {WETH: "aaa", USDC: "bbb"}
""")


@pytest.fixture()
def sample_snapshot_path(tmp_path: Path) -> Path:
    path = tmp_path / "snapshot.yaml"
    path.write_text(SAMPLE_SNAPSHOT_YAML)
    return path


@pytest.fixture()
def sample_yaml_path(tmp_path: Path, sample_snapshot_path: Path) -> Path:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(SAMPLE_CONFIG_YAML)
    return cfg_file
