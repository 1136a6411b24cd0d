"""Pyth Network price oracle."""
from __future__ import annotations

import logging
import ssl

import aiohttp
import certifi

from ..config import PythConfig

logger = logging.getLogger(__name__)


def to_quote_units(price_raw: int, expo: int, quote_decimals: int) -> int:
    """Rescale a Pyth ``price * 10^expo`` to integers with *quote_decimals*.

    Example:  to_quote_units(350000000, -8, 6)  ->  3500000  ($3.50)
    """
    shift = quote_decimals + expo
    if shift >= 0:
        return price_raw * 10**shift
    return price_raw // 10**-shift


def _normalize_id(feed_id: str) -> str:
    # Hermes returns ids without the 0x prefix
    return feed_id.lower().removeprefix("0x")


class PythOracle:
    """Fetch prices from Pyth Network oracle."""

    def __init__(self, config: PythConfig, quote_decimals: int = 8) -> None:
        self.hermes_url = config.hermes_url
        self.price_feeds = dict(config.feeds)
        self.timeout = config.timeout
        self.quote_decimals = quote_decimals

    async def fetch_prices(self, symbols: list[str] | None = None) -> dict[str, int]:
        """Fetch current prices from Pyth Network.

        Args:
            symbols: Optional list of symbols to fetch. If None, fetches all
                     configured feeds.

        Symbols whose price could not be fetched are absent from the result.
        """
        prices: dict[str, int] = {}

        feeds = self.price_feeds
        if symbols is not None:
            feeds = {k: v for k, v in self.price_feeds.items() if k in symbols}

        feed_ids = sorted(set(feeds.values()))
        if not feed_ids:
            return prices

        query_params = "&".join([f"ids[]={fid}" for fid in feed_ids])
        url = f"{self.hermes_url}?{query_params}"

        ssl_context = ssl.create_default_context(cafile=certifi.where())
        connector = aiohttp.TCPConnector(ssl=ssl_context)

        try:
            async with aiohttp.ClientSession(connector=connector) as session:
                async with session.get(
                    url, timeout=aiohttp.ClientTimeout(total=self.timeout)
                ) as response:
                    if response.status != 200:
                        logger.error(
                            "Error fetching prices from Pyth: HTTP %s", response.status
                        )
                        return prices

                    data = await response.json()
                    parsed = data.get("parsed", [])

                    # Reverse mapping from feed ID to asset names
                    id_to_assets: dict[str, list[str]] = {}
                    for asset, feed_id in feeds.items():
                        id_to_assets.setdefault(_normalize_id(feed_id), []).append(asset)

                    for item in parsed:
                        feed_id = _normalize_id(str(item.get("id", "")))
                        price_data = item.get("price", {})
                        price_raw = int(price_data.get("price", 0))
                        expo = int(price_data.get("expo", 0))

                        if price_raw <= 0:
                            logger.warning(
                                "Ignoring non-positive Pyth price for feed %s", feed_id
                            )
                            continue

                        price = to_quote_units(price_raw, expo, self.quote_decimals)
                        for asset in id_to_assets.get(feed_id, []):
                            prices[asset] = price

                    logger.info("Fetched prices from Pyth Network:")
                    for asset, price in sorted(prices.items()):
                        logger.info("  %s: %d (10^-%d)", asset, price, self.quote_decimals)

        except Exception as e:
            logger.error("Error fetching prices from Pyth: %s", e)

        return prices
