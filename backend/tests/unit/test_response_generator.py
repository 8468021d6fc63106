"""
Unit tests for the counterpart response generator.

WHAT: Test reject / accept / counter rules and the phrasing layer
WHY: These rules decide every negotiation outcome
HOW: Known scenarios plus seeded property sweeps over decide()
"""

import math
import random

import pytest

from mandimind.services.localization import variants
from mandimind.services.response_generator import (
    ResponseGenerator,
    counter_price,
    decide,
)


def random_in_band_offer(rng: random.Random, market: int) -> int:
    return rng.randint(math.ceil(0.5 * market), math.floor(1.5 * market))


# ----- scenarios -----

@pytest.mark.unit
def test_immediate_accept_when_spread_under_five_percent():
    reply = decide("buyer", user_offer=100, counterpart_price=103, market_price=100, round_number=1)

    assert reply.kind == "accept"
    assert reply.new_price == 100
    assert reply.spread_percent == pytest.approx(3.0)


@pytest.mark.unit
def test_out_of_band_offer_rejected_with_price_unchanged():
    reply = decide("buyer", user_offer=200, counterpart_price=112, market_price=100, round_number=2)

    assert reply.kind == "reject"
    assert reply.new_price == 112
    assert reply.text_key == "reply.reject"
    assert reply.params == {"offer": 200, "market_price": 100}


@pytest.mark.unit
def test_counter_math_for_buyer():
    """spread 40% -> adjustment round(40 * 0.35) = 14 -> 120 - 14 = 106."""
    reply = decide("buyer", user_offer=80, counterpart_price=120, market_price=100, round_number=1)

    assert reply.kind == "counter"
    assert reply.new_price == 106
    assert reply.params == {"price": 106}


@pytest.mark.unit
def test_counter_math_for_seller_raises_price():
    """Buying counterpart goes up: gap 27 -> round(9.45) = 9 -> 88 + 9 = 97."""
    reply = decide("seller", user_offer=115, counterpart_price=88, market_price=100, round_number=1)

    assert reply.kind == "counter"
    assert reply.new_price == 97


@pytest.mark.unit
def test_late_widened_acceptance():
    reply = decide("buyer", user_offer=95, counterpart_price=105, market_price=100, round_number=4)

    assert reply.kind == "accept"
    assert reply.new_price == 95


@pytest.mark.unit
def test_same_spread_countered_before_round_four():
    reply = decide("buyer", user_offer=95, counterpart_price=105, market_price=100, round_number=3)

    assert reply.kind == "counter"
    assert reply.new_price == 101  # 105 - round(3.5)


@pytest.mark.unit
def test_reject_wins_over_accept():
    """An out-of-band offer is rejected even when it equals the counterpart price."""
    reply = decide("buyer", user_offer=160, counterpart_price=160, market_price=100, round_number=5)
    assert reply.kind == "reject"


# ----- counter_price -----

@pytest.mark.unit
def test_counter_half_rounds_up():
    # gap 10 -> 3.5 -> 4
    assert counter_price("buyer", 90, 100) == 96


@pytest.mark.unit
def test_counter_moves_at_least_one_rupee():
    # gap 1 -> 0.35 would round to 0
    assert counter_price("buyer", 9, 10) == 9
    assert counter_price("seller", 11, 10) == 11


@pytest.mark.unit
def test_counter_moves_toward_offer_when_buyer_overbids():
    assert counter_price("buyer", 130, 110) == 117


# ----- properties -----

@pytest.mark.unit
def test_spread_under_five_percent_always_accepted():
    rng = random.Random(5)
    checked = 0
    while checked < 500:
        market = rng.randint(10, 1000)
        offer = random_in_band_offer(rng, market)
        max_gap = math.ceil(0.05 * market) - 1
        counterpart = offer + rng.randint(-max_gap, max_gap)
        if counterpart <= 0 or abs(offer - counterpart) / market * 100 >= 5:
            continue
        reply = decide(rng.choice(["buyer", "seller"]), offer, counterpart, market, rng.randint(1, 10))
        assert reply.kind == "accept"
        checked += 1


@pytest.mark.unit
def test_never_accepts_mid_spread_in_early_rounds():
    rng = random.Random(6)
    checked = 0
    while checked < 500:
        market = rng.randint(10, 1000)
        offer = random_in_band_offer(rng, market)
        counterpart = rng.randint(1, 2 * market)
        pct = abs(offer - counterpart) / market * 100
        if not 5 <= pct < 12:
            continue
        reply = decide(rng.choice(["buyer", "seller"]), offer, counterpart, market, rng.randint(1, 3))
        assert reply.kind != "accept"
        checked += 1


@pytest.mark.unit
def test_counter_strictly_reduces_gap():
    """1000 random in-band tuples: every counter narrows |counterpart - offer|."""
    rng = random.Random(7)
    counters = 0
    for _ in range(1000):
        role = rng.choice(["buyer", "seller"])
        market = rng.randint(10, 1000)
        offer = random_in_band_offer(rng, market)
        counterpart = rng.randint(1, 2 * market)
        reply = decide(role, offer, counterpart, market, rng.randint(1, 8))
        if reply.kind != "counter":
            continue
        counters += 1
        assert abs(reply.new_price - offer) < abs(counterpart - offer)
        # never overshoots past the offer
        assert (reply.new_price - offer) * (counterpart - offer) >= 0
    assert counters > 100


@pytest.mark.unit
def test_resubmitting_counterpart_counter_terminates():
    """Accepting each counter as the next offer reaches a deal quickly."""
    rng = random.Random(8)
    for _ in range(500):
        role = rng.choice(["buyer", "seller"])
        market = rng.randint(10, 1000)
        offer = random_in_band_offer(rng, market)
        counterpart = round(market * (1.12 if role == "buyer" else 0.88))
        round_number = 1
        for _step in range(15):
            reply = decide(role, offer, counterpart, market, round_number)
            if reply.kind == "accept":
                break
            assert reply.kind == "counter"
            counterpart = reply.new_price
            round_number += 1
            offer = counterpart
        else:
            pytest.fail(f"no deal within 15 rounds for market={market}")


# ----- phrasing -----

@pytest.mark.unit
def test_phrasing_does_not_change_decision():
    args = ("buyer", 80, 120, 100, 1)
    first = ResponseGenerator(random.Random(1)).respond(*args)
    second = ResponseGenerator(random.Random(99)).respond(*args)

    assert (first.kind, first.new_price) == (second.kind, second.new_price)
    assert first.text in [v.format(price=106) for v in variants("reply.counter", "en")]


@pytest.mark.unit
def test_phrasing_is_reproducible_with_seed():
    args = ("seller", 115, 88, 100, 1)
    first, second = ResponseGenerator(random.Random(3)), ResponseGenerator(random.Random(3))
    texts_a = [first.respond(*args).text for _ in range(10)]
    texts_b = [second.respond(*args).text for _ in range(10)]
    assert texts_a == texts_b


@pytest.mark.unit
def test_all_counter_phrasings_reachable():
    generator = ResponseGenerator(random.Random(11))
    seen = {generator.respond("buyer", 80, 120, 100, 1).variant for _ in range(200)}
    assert seen == {0, 1, 2}


@pytest.mark.unit
def test_localized_reject_and_accept_text():
    generator = ResponseGenerator(random.Random(0))

    reject = generator.respond("buyer", 200, 112, 100, 1, language="hi")
    assert reject.text == "₹200? ये सही नहीं है। बाजार भाव ₹100। फिर से बोलो।"

    accept = generator.respond("buyer", 100, 102, 100, 1, language="ta")
    assert accept.text == "சரி! ₹100 🤝"


@pytest.mark.unit
def test_unknown_language_falls_back_to_english():
    reply = ResponseGenerator(random.Random(0)).respond("buyer", 100, 102, 100, 1, language="fr")
    assert reply.text == "Done! ₹100 🤝"
