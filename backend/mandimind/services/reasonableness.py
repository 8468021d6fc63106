"""
Reasonableness validator.

WHAT: Decide whether an offer is worth entertaining at all
WHY: Offers far from the market are rejected outright instead of countered
HOW: Closed band [low x market, high x market]
"""

from ..core.config import settings


def reasonable_band(
    market_price: float,
    low: float | None = None,
    high: float | None = None,
) -> tuple[float, float]:
    """Return the (min, max) prices considered reasonable for a market price."""
    low = settings.REASONABLE_BAND_LOW if low is None else low
    high = settings.REASONABLE_BAND_HIGH if high is None else high
    return market_price * low, market_price * high


def is_reasonable(
    offer: float,
    market_price: float,
    low: float | None = None,
    high: float | None = None,
) -> bool:
    """
    Check an offer against the reasonable band around the market price.

    Args:
        offer: Price stated by the user (already input-validated)
        market_price: Session market price, must be > 0
        low: Lower band multiplier (defaults to REASONABLE_BAND_LOW, 0.5)
        high: Upper band multiplier (defaults to REASONABLE_BAND_HIGH, 1.5)

    Returns:
        True if min <= offer <= max
    """
    if market_price <= 0:
        raise ValueError(f"market_price must be positive, got {market_price}")
    minimum, maximum = reasonable_band(market_price, low, high)
    return minimum <= offer <= maximum
