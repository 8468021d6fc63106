"""
Counterpart response generator.

WHAT: Decide how the simulated counterpart answers a user offer
WHY: Core bargaining behaviour: reject outliers, accept close offers, counter otherwise
HOW: Pure decide() for the numbers, phrase() for the wording (seedable RNG)

Rules, first match wins:
1. Reject if the offer is outside the reasonable band (price unchanged).
2. Accept if the spread is under 5% of market, or under 12% after round 3.
3. Counter by moving 35% of the remaining gap toward the user's offer.
"""

import random
from typing import Optional

from ..models.negotiation import CounterpartReply, Role
from ..utils.logger import get_logger
from ..utils.pricing import round_price, spread_percent
from .localization import render_variant, variants
from .reasonableness import is_reasonable

logger = get_logger(__name__)

ACCEPT_SPREAD_PERCENT = 5.0
LATE_ACCEPT_SPREAD_PERCENT = 12.0
LATE_ACCEPT_AFTER_ROUND = 3
COUNTER_STEP = 0.35


def decide(
    role: Role,
    user_offer: int,
    counterpart_price: int,
    market_price: int,
    round_number: int,
) -> CounterpartReply:
    """
    Compute the counterpart's decision without choosing any wording.

    Args:
        role: The user's role (the counterpart plays the other side)
        user_offer: Price the user just submitted
        counterpart_price: Counterpart's current price
        market_price: Session market price (> 0)
        round_number: Current round, starting at 1

    Returns:
        CounterpartReply with kind, new_price, text_key and params (no text)
    """
    spread_pct = spread_percent(user_offer, counterpart_price, market_price)

    if not is_reasonable(user_offer, market_price):
        return CounterpartReply(
            kind="reject",
            new_price=counterpart_price,
            text_key="reply.reject",
            params={"offer": user_offer, "market_price": market_price},
            spread_percent=spread_pct,
        )

    late = round_number > LATE_ACCEPT_AFTER_ROUND
    if spread_pct < ACCEPT_SPREAD_PERCENT or (late and spread_pct < LATE_ACCEPT_SPREAD_PERCENT):
        return CounterpartReply(
            kind="accept",
            new_price=user_offer,
            text_key="reply.accept",
            params={"price": user_offer},
            spread_percent=spread_pct,
        )

    new_price = counter_price(role, user_offer, counterpart_price)
    return CounterpartReply(
        kind="counter",
        new_price=new_price,
        text_key="reply.counter",
        params={"price": new_price},
        spread_percent=spread_pct,
    )


def counter_price(role: Role, user_offer: int, counterpart_price: int) -> int:
    """
    Move the counterpart's price 35% of the gap toward the user's offer.

    A selling counterpart normally comes down and a buying one goes up; the
    step is taken toward the offer either way, and is at least one rupee so
    every counter narrows the gap.
    """
    gap = abs(counterpart_price - user_offer)
    if gap == 0:
        return counterpart_price
    adjustment = max(1, round_price(gap * COUNTER_STEP))
    if user_offer < counterpart_price:
        new_price = counterpart_price - adjustment
    else:
        new_price = counterpart_price + adjustment
    logger.debug(
        f"Counter for user {role}: {counterpart_price} -> {new_price} "
        f"(offer {user_offer}, gap {gap}, step {adjustment})"
    )
    return new_price


class ResponseGenerator:
    """
    Turn decisions into localized counterpart replies.

    The RNG only selects among equivalent phrasings; it never influences
    the numeric decision.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def phrase(self, reply: CounterpartReply, language: str) -> CounterpartReply:
        """Attach rendered text, choosing a phrasing at random when there are several."""
        options = variants(reply.text_key, language)
        variant = self.rng.randrange(len(options)) if len(options) > 1 else 0
        text = render_variant(reply.text_key, language, variant, **reply.params)
        return reply.model_copy(update={"variant": variant, "text": text})

    def respond(
        self,
        role: Role,
        user_offer: int,
        counterpart_price: int,
        market_price: int,
        round_number: int,
        language: str = "en",
    ) -> CounterpartReply:
        """Decide and phrase the counterpart's answer to a user offer."""
        reply = decide(role, user_offer, counterpart_price, market_price, round_number)
        logger.info(
            f"Counterpart {reply.kind}: offer={user_offer} counterpart={counterpart_price} "
            f"market={market_price} round={round_number} spread={reply.spread_percent:.1f}% "
            f"-> {reply.new_price}"
        )
        return self.phrase(reply, language)
