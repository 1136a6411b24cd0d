"""Protocol constants for liquidation math."""

# Fixed-point scale factors
PERCENTAGE_FACTOR = 10_000  # 100.00% in basis points

# Integer widths
WORD_BITS = 256  # balances, sums
WIDE_BITS = 512  # intermediate products
UINT256_MAX = 2**WORD_BITS - 1
UINT512_MAX = 2**WIDE_BITS - 1

# Liquidation parameters
CLOSE_FACTOR_BPS = 5_000  # 50% of total debt per call
MIN_LIQUIDATION_BONUS = PERCENTAGE_FACTOR  # bonus is never a penalty

# 10**76 < 2**256 < 10**78
MAX_DECIMALS = 76

# "Cover as much as allowed"
MAX_DEBT_TO_COVER = UINT256_MAX
