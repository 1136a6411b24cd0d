"""Reserve data provider: per-reserve configuration and user balances."""
from typing import Protocol

from ..models import ReserveConfig, UserReserve


class ReserveDataProvider(Protocol):
    """Abstract interface for reading lending-protocol reserve state."""

    async def list_reserves(self) -> list[ReserveConfig]: ...

    async def get_reserve(self, symbol: str) -> ReserveConfig: ...

    async def get_user_position(self, user: str, symbol: str) -> UserReserve: ...
