"""Error taxonomy for the liquidation estimator."""


class LiquidationError(Exception):
    """Base error for liquidation estimation."""


class ArithmeticOverflow(LiquidationError):
    """An intermediate sum or product exceeded the working integer width."""


class InvalidReserveTerms(LiquidationError, ValueError):
    """Reserve price, decimals or bonus violate their invariants."""


class InvalidLiquidationRequest(LiquidationError, ValueError):
    """A request amount is negative."""


class CollateralCannotBeLiquidated(LiquidationError):
    """The collateral reserve is not usable as collateral for this user."""


class CurrencyNotBorrowed(LiquidationError):
    """The user holds no debt in the requested debt asset."""


class UnknownReserve(LiquidationError, KeyError):
    """A reserve symbol or user is missing from the data source."""
