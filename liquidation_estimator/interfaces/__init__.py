"""Protocol interfaces for the liquidation estimator."""
from .price_oracle import PriceOracle
from .reserve_data import ReserveDataProvider

__all__ = ["PriceOracle", "ReserveDataProvider"]
