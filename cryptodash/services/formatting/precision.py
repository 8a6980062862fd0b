"""
Per-symbol display precision.

The number of decimals shown for a trading pair is learned from the prices
streamed for it. Precision only ever increases for a symbol, so concurrent
observers (ticker and kline streams) can write in any order.
"""

import logging
import re
import threading
from decimal import Decimal, InvalidOperation
from typing import Optional, Union

from cryptodash.core.config import settings

logger = logging.getLogger(__name__)

QUOTE_SUFFIX = re.compile(r"(USDT|USDC|BUSD|FDUSD)$")

# Typical decimals by base asset, used until a price has been observed
FALLBACK_DECIMALS = {
    "BTC": 2,
    "ETH": 2,
    "BNB": 2,
    "SOL": 2,
    "ADA": 4,
    "XRP": 4,
    "DOT": 3,
    "DOGE": 6,
    "SHIB": 8,
    "PEPE": 8,
}


def significant_decimals(price: Union[float, str]) -> Optional[int]:
    """
    Decimal places of a price with trailing zeros ignored.

    Strings are read as-is (exchanges send "0.00001230"); floats go through
    their shortest repr. Returns None for zero, negative or unparseable input.
    """
    try:
        value = Decimal(price if isinstance(price, str) else repr(float(price)))
    except (InvalidOperation, ValueError, TypeError):
        return None

    if not value.is_finite() or value <= 0:
        return None

    exponent = value.normalize().as_tuple().exponent
    return max(0, -exponent)


class SymbolPrecisionCache:
    """
    Thread-safe symbol -> decimals store.

    Usage:
        cache = SymbolPrecisionCache()
        cache.observe("PEPEUSDT", "0.00001234")
        cache.get("PEPEUSDT")  # 8
    """

    def __init__(
        self,
        min_decimals: Optional[int] = None,
        max_decimals: Optional[int] = None,
    ):
        self.min_decimals = settings.min_price_decimals if min_decimals is None else min_decimals
        self.max_decimals = settings.max_price_decimals if max_decimals is None else max_decimals
        self._decimals: dict[str, int] = {}
        self._lock = threading.Lock()

    def observe(self, symbol: str, price: Union[float, str]) -> Optional[int]:
        """
        Record a price for a symbol and return the symbol's current decimals.

        The stored value is raised when the price is finer than anything seen
        before and left alone otherwise.
        """
        if not symbol:
            return None

        decimals = significant_decimals(price)
        if decimals is None:
            return self._decimals.get(symbol)

        decimals = max(self.min_decimals, min(self.max_decimals, decimals))
        with self._lock:
            current = self._decimals.get(symbol)
            if current is None or decimals > current:
                self._decimals[symbol] = decimals
                logger.debug(f"Precision for {symbol}: {current} -> {decimals}")
                return decimals
            return current

    def get(self, symbol: Optional[str]) -> int:
        """Cached decimals, else the base-asset fallback, else the minimum."""
        if not symbol:
            return self.min_decimals

        cached = self._decimals.get(symbol)
        if cached is not None:
            return cached

        base = QUOTE_SUFFIX.sub("", symbol)
        return FALLBACK_DECIMALS.get(base, self.min_decimals)

    def clear(self) -> None:
        with self._lock:
            self._decimals.clear()

    def __contains__(self, symbol: str) -> bool:
        return symbol in self._decimals

    def __len__(self) -> int:
        return len(self._decimals)


# Process-wide store shared by the API and streaming collaborators
_cache_instance: Optional[SymbolPrecisionCache] = None


def get_precision_cache() -> SymbolPrecisionCache:
    """Get or create the process-wide precision cache."""
    global _cache_instance
    if _cache_instance is None:
        _cache_instance = SymbolPrecisionCache()
    return _cache_instance
