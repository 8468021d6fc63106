"""
Unit tests for the coaching advisor.

WHAT: Test tip selection by spread and its localization
WHY: Tip is recomputed on every price change and shown beside the chat
HOW: Threshold checks around the 8% boundary
"""

import pytest

from mandimind.services.coaching import tip


@pytest.mark.unit
def test_close_spread_suggests_meeting_in_middle():
    result = tip(user_price=100, counterpart_price=107, market_price=100)

    assert result.text_key == "coach.close"
    assert result.text == "💡 Close! Split or accept."
    assert result.spread_percent == pytest.approx(7.0)


@pytest.mark.unit
def test_eight_percent_is_not_close():
    result = tip(user_price=100, counterpart_price=108, market_price=100)

    assert result.text_key == "coach.market"
    assert result.params == {"market_price": 100}
    assert result.text == "💡 Market: ₹100. Stay within ±50%"


@pytest.mark.unit
def test_spread_is_symmetric():
    assert tip(120, 85, 100).text_key == tip(85, 120, 100).text_key == "coach.market"


@pytest.mark.unit
def test_localized_tips():
    assert tip(100, 101, 100, "hi").text == "💡 करीब! बीच में मिलें।"
    assert tip(85, 112, 100, "bn").text == "💡 বাজার: ₹100. ±50% থাকুন"
