"""Command-line interface for the liquidation estimator."""
from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Any

from .config import load_config
from .constants import MAX_DEBT_TO_COVER
from .errors import LiquidationError
from .logging_setup import configure_logging
from .models import LiquidationEstimate, ReserveConfig
from .services import LiquidationEstimator

logger = logging.getLogger(__name__)


def parse_amount(value: str) -> int:
    """Parse ``--amount``: a non-negative integer in smallest units, or ``max``."""
    if value.lower() == "max":
        return MAX_DEBT_TO_COVER
    try:
        amount = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid amount: {value!r}") from None
    if amount < 0:
        raise argparse.ArgumentTypeError("amount must be non-negative")
    return amount


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse CLI parser."""
    parser = argparse.ArgumentParser(
        prog="liquidation-estimator",
        description="Estimate lending-protocol liquidation outcomes",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to config.yaml (default: config.yaml in project root)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )

    sub = parser.add_subparsers(dest="command")

    estimate_parser = sub.add_parser("estimate", help="Estimate a liquidation call")
    estimate_parser.add_argument("user", help="Borrower address")
    estimate_parser.add_argument("collateral", help="Collateral reserve symbol")
    estimate_parser.add_argument("debt", help="Debt reserve symbol")
    estimate_parser.add_argument(
        "--amount",
        type=parse_amount,
        default=MAX_DEBT_TO_COVER,
        help="Debt to cover in the debt asset's smallest unit, or 'max' (default)",
    )
    estimate_parser.add_argument(
        "--receive-collateral-token",
        action="store_true",
        help="Receive the collateral receipt token instead of the underlying",
    )
    estimate_parser.add_argument(
        "--json", action="store_true", help="Print the plan as JSON"
    )

    sub.add_parser("reserves", help="List reserves in the snapshot")

    return parser


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def format_units(amount: int, decimals: int) -> str:
    """Render an integer amount with *decimals* places, without rounding."""
    whole, frac = divmod(amount, 10**decimals)
    if decimals == 0 or frac == 0:
        return f"{whole:,}"
    return f"{whole:,}.{frac:0{decimals}d}".rstrip("0")


def estimate_to_dict(estimate: LiquidationEstimate) -> dict[str, Any]:
    request, result = estimate.request, estimate.plan
    return {
        "user": request.user,
        "collateral": request.collateral.symbol,
        "debt": request.debt.symbol,
        "debt_to_cover": str(request.debt_to_cover),
        "receive_collateral_token": request.receive_collateral_token,
        "actual_debt_to_liquidate": str(result.actual_debt_to_liquidate),
        "max_collateral_to_liquidate": str(result.max_collateral_to_liquidate),
        "outcome": result.outcome.value,
    }


def render_estimate(estimate: LiquidationEstimate) -> str:
    request, result = estimate.request, estimate.plan
    collateral, debt = request.collateral, request.debt
    cover = (
        "max"
        if request.debt_to_cover == MAX_DEBT_TO_COVER
        else format_units(request.debt_to_cover, debt.decimals)
    )
    status = "✅ OK" if result.is_ok else "⚠️ INSUFFICIENT LIQUIDITY"
    return (
        f"📊 {request.user} · {collateral.symbol}/{debt.symbol}\n"
        f"\n"
        f"Requested cover: {cover} {debt.symbol}\n"
        f"Debt to liquidate: "
        f"{format_units(result.actual_debt_to_liquidate, debt.decimals)} {debt.symbol}\n"
        f"Collateral received: "
        f"{format_units(result.max_collateral_to_liquidate, collateral.decimals)} "
        f"{collateral.symbol}\n"
        f"Liquidation bonus: {collateral.liquidation_bonus / 100:.2f}%\n"
        f"\n"
        f"{status}"
    )


def render_reserves(
    reserves: list[tuple[ReserveConfig, int | None]], quote_decimals: int
) -> str:
    lines = []
    for reserve, price in reserves:
        price_str = "—" if price is None else format_units(price, quote_decimals)
        lines.append(
            f"{reserve.symbol:<8} decimals={reserve.decimals:<3} "
            f"bonus={reserve.liquidation_bonus / 100:.2f}%  "
            f"threshold={reserve.liquidation_threshold / 100:.2f}%  "
            f"price={price_str}"
        )
    return "\n".join(lines) if lines else "No reserves in snapshot."


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


async def _run(args: argparse.Namespace) -> None:
    """Execute the selected command."""
    configure_logging(args.log_level)
    config = load_config(args.config)
    estimator = LiquidationEstimator.from_config(config)

    if args.command == "estimate":
        estimate = await estimator.estimate(
            args.user,
            args.collateral,
            args.debt,
            debt_to_cover=args.amount,
            receive_collateral_token=args.receive_collateral_token,
        )
        if args.json:
            print(json.dumps(estimate_to_dict(estimate), indent=2))
        else:
            print(render_estimate(estimate))
    elif args.command == "reserves":
        overview = await estimator.reserve_overview()
        print(render_reserves(overview, config.estimator.quote_decimals))
    else:
        build_parser().print_help()
        sys.exit(1)


def main() -> None:
    """Entry point."""
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        asyncio.run(_run(args))
    except LiquidationError as e:
        logger.error("Liquidation estimate failed: %s", e)
        sys.exit(2)
