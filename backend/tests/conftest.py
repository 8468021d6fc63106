"""
Pytest configuration and shared fixtures for backend tests.

WHAT: Centralized test configuration with markers and seeded engines
WHY: Keep randomness pinned and the typing delay out of the test clock
HOW: Define pytest markers, fixtures, and test helpers
"""

import random

import pytest

from mandimind.core.negotiation_engine import NegotiationEngine
from mandimind.core.session_manager import SessionManager
from mandimind.data.commodities import get_commodity_by_id
from mandimind.models.negotiation import Commodity, NegotiationSession
from mandimind.services.response_generator import ResponseGenerator


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests (isolated component tests)"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests (session manager, API)"
    )
    config.addinivalue_line(
        "markers", "slow: Tests that take significant time to run"
    )


class FixedRandom(random.Random):
    """Random whose uniform() always returns the same value."""

    def __init__(self, value: float = 0.0):
        super().__init__(0)
        self.value = value

    def uniform(self, a, b):
        return self.value


def make_active_session(
    role: str = "buyer",
    market_price: int = 100,
    user_price: int = 85,
    counterpart_price: int = 112,
    round_number: int = 1,
    language: str = "en",
) -> NegotiationSession:
    """Build an active snapshot with explicit prices, bypassing the jitter."""
    return NegotiationSession(
        language=language,
        role=role,
        commodity=get_commodity_by_id("lentil"),
        market_price=market_price,
        user_price=user_price,
        counterpart_price=counterpart_price,
        round=round_number,
        status="active",
    )


@pytest.fixture
def active_session():
    """
    Factory for active sessions at explicit prices.

    WHAT: make_active_session exposed as a fixture
    WHY: Scenario tests need exact market/user/counterpart prices
    HOW: Return the factory; tests call it with keyword overrides
    """
    return make_active_session


@pytest.fixture
def fixed_random():
    """Factory for Random instances with a pinned uniform() value."""
    return FixedRandom


@pytest.fixture
def engine():
    """Engine with zero market jitter and seeded phrasing."""
    return NegotiationEngine(rng=FixedRandom(0.0), responder=ResponseGenerator(random.Random(1)))


@pytest.fixture
def seeded_engine():
    """Engine with real (seeded) jitter."""
    return NegotiationEngine(rng=random.Random(42), responder=ResponseGenerator(random.Random(42)))


@pytest.fixture
def lentils() -> Commodity:
    """Base price 100, so zero jitter gives market price 100."""
    return get_commodity_by_id("lentil")


@pytest.fixture
def manager(engine):
    """Session manager with a tiny typing delay."""
    return SessionManager(engine=engine, min_delay=0.0, max_delay=0.01, delay_rng=random.Random(0))
