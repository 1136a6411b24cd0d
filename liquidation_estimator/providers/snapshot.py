"""YAML snapshot of reserve configuration, user balances and prices.

Lets the estimator run offline against a frozen copy of protocol state. The
provider serves both ``ReserveDataProvider`` and ``PriceOracle``.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from ..errors import UnknownReserve
from ..models import AssetPosition, ReserveConfig, UserReserve

logger = logging.getLogger(__name__)


def parse_reserve(symbol: str, raw: dict[str, Any]) -> ReserveConfig:
    """Build a ReserveConfig from one ``reserves:`` entry."""
    try:
        return ReserveConfig(
            symbol=symbol,
            decimals=int(raw["decimals"]),
            liquidation_bonus=int(raw["liquidation_bonus"]),
            liquidation_threshold=int(raw.get("liquidation_threshold", 0)),
            available_liquidity=int(raw.get("available_liquidity", 0)),
        )
    except KeyError as e:
        raise ValueError(f"Reserve '{symbol}' is missing field {e}") from e


def parse_user_reserve(raw: dict[str, Any]) -> UserReserve:
    """Build a UserReserve from one ``users.<address>.<symbol>:`` entry."""
    return UserReserve(
        position=AssetPosition(
            collateral_balance=int(raw.get("collateral_balance", 0)),
            stable_debt=int(raw.get("stable_debt", 0)),
            variable_debt=int(raw.get("variable_debt", 0)),
        ),
        use_as_collateral=bool(raw.get("use_as_collateral", False)),
    )


class SnapshotProvider:
    """Reserve data and prices read from an in-memory snapshot."""

    def __init__(
        self,
        reserves: dict[str, ReserveConfig],
        users: dict[str, dict[str, UserReserve]],
        prices: dict[str, int],
    ) -> None:
        self._reserves = dict(reserves)
        self._users = {user.lower(): dict(entries) for user, entries in users.items()}
        self._prices = dict(prices)

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> SnapshotProvider:
        reserves: dict[str, ReserveConfig] = {}
        prices: dict[str, int] = {}
        for symbol, entry in (raw.get("reserves") or {}).items():
            reserves[symbol] = parse_reserve(symbol, entry)
            if "price" in entry:
                prices[symbol] = int(entry["price"])

        users: dict[str, dict[str, UserReserve]] = {}
        for user, entries in (raw.get("users") or {}).items():
            for symbol in entries:
                if symbol not in reserves:
                    raise ValueError(
                        f"User '{user}' references unknown reserve '{symbol}'"
                    )
            users[str(user)] = {
                symbol: parse_user_reserve(entry) for symbol, entry in entries.items()
            }

        return cls(reserves, users, prices)

    @classmethod
    def from_file(cls, path: str | Path) -> SnapshotProvider:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Snapshot file not found: {path}")

        with open(path) as f:
            raw = yaml.safe_load(f) or {}

        provider = cls.from_dict(raw)
        logger.info(
            "Snapshot loaded from %s (%d reserves, %d users)",
            path, len(provider._reserves), len(provider._users),
        )
        return provider

    async def list_reserves(self) -> list[ReserveConfig]:
        return [self._reserves[symbol] for symbol in sorted(self._reserves)]

    async def get_reserve(self, symbol: str) -> ReserveConfig:
        try:
            return self._reserves[symbol]
        except KeyError:
            raise UnknownReserve(f"Unknown reserve '{symbol}'") from None

    async def get_user_position(self, user: str, symbol: str) -> UserReserve:
        if symbol not in self._reserves:
            raise UnknownReserve(f"Unknown reserve '{symbol}'")
        entries = self._users.get(user.lower())
        if entries is None:
            raise UnknownReserve(f"Unknown user '{user}'")
        return entries.get(symbol, UserReserve())

    async def fetch_prices(self, symbols: list[str] | None = None) -> dict[str, int]:
        if symbols is None:
            return dict(self._prices)
        return {s: p for s, p in self._prices.items() if s in symbols}
