"""
Price arithmetic helpers.

WHAT: Rounding and spread calculations shared by the negotiation services
WHY: Prices are whole rupees; halves must round up consistently everywhere
HOW: Small pure functions
"""

import math


def round_price(value: float) -> int:
    """Round to the nearest whole rupee, halves rounding up (12.5 -> 13)."""
    return int(math.floor(value + 0.5))


def spread(first: float, second: float) -> float:
    """Absolute gap between two prices."""
    return abs(first - second)


def spread_percent(first: float, second: float, market_price: float) -> float:
    """Gap between two prices as a percentage of the market price."""
    return spread(first, second) / market_price * 100
