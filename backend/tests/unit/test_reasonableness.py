"""
Unit tests for the reasonableness validator.

WHAT: Test the [50%, 150%] band around market price
WHY: Out-of-band offers are rejected before any bargaining happens
HOW: Boundary checks plus a seeded sweep against the closed-form definition
"""

import random

import pytest

from mandimind.services.reasonableness import is_reasonable, reasonable_band


@pytest.mark.unit
@pytest.mark.parametrize("offer,expected", [
    (49, False),
    (50, True),
    (100, True),
    (150, True),
    (151, False),
    (0, False),
])
def test_band_boundaries_are_inclusive(offer, expected):
    assert is_reasonable(offer, 100) is expected


@pytest.mark.unit
def test_band_matches_definition_for_random_inputs():
    """isReasonable(offer, m) == (0.5m <= offer <= 1.5m)."""
    rng = random.Random(2024)
    for _ in range(2000):
        market = rng.randint(1, 5000)
        offer = rng.randint(0, 10000)
        assert is_reasonable(offer, market) == (0.5 * market <= offer <= 1.5 * market)


@pytest.mark.unit
def test_odd_market_price_half_boundaries():
    assert is_reasonable(50.5, 101) is True
    assert is_reasonable(50, 101) is False
    assert is_reasonable(151.5, 101) is True
    assert is_reasonable(152, 101) is False


@pytest.mark.unit
def test_reasonable_band_values():
    assert reasonable_band(80) == (40.0, 120.0)
    assert reasonable_band(80, low=0.25, high=2.0) == (20.0, 160.0)


@pytest.mark.unit
def test_non_positive_market_price_rejected():
    with pytest.raises(ValueError, match="market_price must be positive"):
        is_reasonable(10, 0)


@pytest.mark.unit
def test_is_pure():
    assert [is_reasonable(75, 100) for _ in range(3)] == [True, True, True]
