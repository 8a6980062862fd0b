"""
Formatting Service

Per-symbol display precision and price formatting helpers.
"""

from cryptodash.services.formatting.precision import (
    SymbolPrecisionCache,
    get_precision_cache,
    significant_decimals,
)
from cryptodash.services.formatting.prices import (
    format_price,
    format_price_change,
    format_symbol_price,
)

__all__ = [
    "SymbolPrecisionCache",
    "get_precision_cache",
    "significant_decimals",
    "format_price",
    "format_price_change",
    "format_symbol_price",
]
