"""
Coaching advisor.

WHAT: One-line bargaining tip derived from the current spread
WHY: Nudge the user toward closing when close, toward the market when far
HOW: Spread under 8% of market -> "meet in the middle", else market reminder
"""

from ..models.negotiation import CoachingTip
from ..utils.pricing import spread_percent
from .localization import translate

CLOSE_SPREAD_PERCENT = 8.0


def tip(user_price: int, counterpart_price: int, market_price: int, language: str = "en") -> CoachingTip:
    """
    Build the coaching tip for the current prices.

    Args:
        user_price: User's latest price
        counterpart_price: Counterpart's latest price
        market_price: Session market price (> 0)
        language: Display language

    Returns:
        CoachingTip with key, params and localized text
    """
    spread_pct = spread_percent(user_price, counterpart_price, market_price)
    if spread_pct < CLOSE_SPREAD_PERCENT:
        key, params = "coach.close", {}
    else:
        key, params = "coach.market", {"market_price": market_price}
    return CoachingTip(
        text_key=key,
        params=params,
        text=translate(key, language, **params),
        spread_percent=spread_pct,
    )
