"""
Price formatting for display.
"""

from typing import Optional

from cryptodash.services.formatting.precision import SymbolPrecisionCache, get_precision_cache


def _strip_zeros(text: str) -> str:
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _magnitude_decimals(value: float) -> int:
    if value < 0.01:
        return 8
    if value < 1:
        return 4
    return 2


def format_price(price: Optional[float]) -> str:
    """Smart price formatting: more decimals for small prices, no trailing zeros."""
    if not price:
        return "0"
    price = float(price)
    return _strip_zeros(f"{price:.{_magnitude_decimals(price)}f}")


def format_price_change(change: Optional[float]) -> str:
    """Like format_price, but sized by the magnitude of a signed change."""
    if not change:
        return "0"
    change = float(change)
    return _strip_zeros(f"{change:.{_magnitude_decimals(abs(change))}f}")


def format_symbol_price(
    price: float,
    symbol: str,
    cache: Optional[SymbolPrecisionCache] = None,
) -> str:
    """Format with the fixed number of decimals learned for the symbol."""
    cache = cache or get_precision_cache()
    return f"{float(price):.{cache.get(symbol)}f}"
