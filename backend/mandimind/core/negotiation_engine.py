"""
Negotiation session state machine.

WHAT: Round-by-round bargaining between the user and a simulated counterpart
WHY: Single owner of role, commodity, prices, status transitions and message log
HOW: Every operation takes a NegotiationSession snapshot and returns a new one

States: selecting -> active -> completed. reset() starts a fresh snapshot.
Randomness (market jitter, reply phrasing) comes from injected RNGs only.
"""

import random
import re
from decimal import Decimal, InvalidOperation
from typing import Optional

from .config import settings
from ..models.negotiation import (
    Commodity,
    CoachingTip,
    CounterpartReply,
    Message,
    NegotiationSession,
    Role,
)
from ..services import coaching
from ..services.localization import translate
from ..services.response_generator import ResponseGenerator
from ..utils.exceptions import InvalidSessionStateException, OfferValidationError
from ..utils.logger import get_logger
from ..utils.pricing import round_price

logger = get_logger(__name__)

# Opening prices relative to the market price: user starts favourably,
# counterpart starts on the opposite side.
OPENING_MULTIPLIERS: dict[str, tuple[float, float]] = {
    # role: (user, counterpart)
    "buyer": (0.85, 1.12),
    "seller": (1.15, 0.88),
}

DEFAULT_NUDGE_STEP = 5

_NUMBER_PATTERN = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)$")


class NegotiationEngine:
    """
    Pure transitions over NegotiationSession snapshots.

    Attributes:
        rng: Source for market-price jitter
        responder: Counterpart response generator (owns the phrasing RNG)
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        responder: Optional[ResponseGenerator] = None,
        quantity: Optional[int] = None,
        max_offer_price: Optional[int] = None,
        market_jitter: Optional[float] = None,
    ):
        seed = settings.NEGOTIATION_SEED
        self.rng = rng or random.Random(seed)
        self.responder = responder or ResponseGenerator(random.Random(seed))
        self.quantity = quantity or settings.DEFAULT_QUANTITY
        self.max_offer_price = max_offer_price or settings.MAX_OFFER_PRICE
        self.market_jitter = settings.MARKET_JITTER if market_jitter is None else market_jitter

    # ----- lifecycle -----

    def new_session(self, language: str = None, session_id: Optional[str] = None) -> NegotiationSession:
        """Create an empty session in the selecting state."""
        data = {
            "language": language or settings.DEFAULT_LANGUAGE,
            "quantity": self.quantity,
        }
        if session_id:
            data["session_id"] = session_id
        return NegotiationSession(**data)

    def choose_role(self, session: NegotiationSession, role: Role) -> NegotiationSession:
        """Set the user's role; only while selecting and before a commodity is chosen."""
        if session.status != "selecting":
            raise InvalidSessionStateException("choose role", session.status)
        if role not in OPENING_MULTIPLIERS:
            raise ValueError(f"Unknown role: {role}")
        return session.evolve(role=role)

    def choose_commodity(self, session: NegotiationSession, commodity: Commodity) -> NegotiationSession:
        """
        Open the negotiation for a commodity.

        Draws the market price (base price +/- jitter), sets the asymmetric
        opening prices, appends the counterpart's opening offer and moves
        the session to active at round 1.
        """
        if session.status != "selecting":
            raise InvalidSessionStateException("choose commodity", session.status)
        if session.role is None:
            raise InvalidSessionStateException(
                "choose commodity", session.status, "role must be chosen first"
            )

        jitter = self.rng.uniform(-self.market_jitter, self.market_jitter)
        market_price = max(1, round_price(commodity.base_price * (1 + jitter)))
        user_multiplier, counterpart_multiplier = OPENING_MULTIPLIERS[session.role]
        user_price = round_price(market_price * user_multiplier)
        counterpart_price = round_price(market_price * counterpart_multiplier)

        # Counterpart sells when the user buys, and vice versa
        key = "opening.selling" if session.role == "buyer" else "opening.buying"
        params = {
            "commodity": commodity.name_in(session.language),
            "price": counterpart_price,
            "unit": commodity.unit,
        }
        opening = Message(
            sender="counterpart",
            text=translate(key, session.language, **params),
            text_key=key,
            params=params,
            price=counterpart_price,
            kind="offer",
        )

        logger.info(
            f"Session {session.session_id} started: {session.role} of {commodity.commodity_id}, "
            f"market={market_price}, user={user_price}, counterpart={counterpart_price}"
        )
        return session.evolve(
            commodity=commodity,
            market_price=market_price,
            user_price=user_price,
            counterpart_price=counterpart_price,
            round=1,
            status="active",
            messages=session.messages + (opening,),
        )

    def start_session(
        self,
        role: Role,
        commodity: Commodity,
        language: str = None,
        session_id: Optional[str] = None,
    ) -> NegotiationSession:
        """Shortcut for new_session -> choose_role -> choose_commodity."""
        session = self.new_session(language, session_id)
        session = self.choose_role(session, role)
        return self.choose_commodity(session, commodity)

    def reset(self, session: NegotiationSession) -> NegotiationSession:
        """Discard the negotiation; keep the session id and language."""
        logger.info(f"Session {session.session_id} reset (was {session.status})")
        return self.new_session(session.language, session.session_id)

    def change_language(self, session: NegotiationSession, language: str) -> NegotiationSession:
        """Switch the language used for messages appended from now on."""
        return session.evolve(language=language)

    # ----- offer validation -----

    def parse_offer(self, raw_input: Optional[str], language: str = "en") -> int:
        """
        Validate raw user input and return the offered price.

        Decimal input is truncated to whole rupees.

        Raises:
            OfferValidationError: empty/non-numeric, <= 0, or above the ceiling
        """
        text = (raw_input or "").strip()
        if not text or not _NUMBER_PATTERN.match(text):
            raise self._validation_error("error.enter_price", language, raw_input)
        try:
            price = int(Decimal(text))
        except InvalidOperation:
            raise self._validation_error("error.enter_price", language, raw_input)
        return self.check_offer_price(price, language, raw_input)

    def check_offer_price(self, price: int, language: str = "en", raw_input: Optional[str] = None) -> int:
        """Apply the positive / ceiling checks to an already-numeric price."""
        if price <= 0:
            raise self._validation_error("error.price_positive", language, raw_input)
        if price > self.max_offer_price:
            raise self._validation_error("error.price_too_high", language, raw_input)
        return price

    @staticmethod
    def _validation_error(key: str, language: str, raw_input: Optional[str]) -> OfferValidationError:
        return OfferValidationError(key, translate(key, language), raw_input)

    # ----- offers -----

    def record_user_offer(self, session: NegotiationSession, price: int) -> NegotiationSession:
        """Append the user's offer message and make it the user's current price."""
        if not session.is_active:
            raise InvalidSessionStateException("submit offer", session.status)
        params = {"price": price}
        message = Message(
            sender="user",
            text=translate("offer.user", session.language, **params),
            text_key="offer.user",
            params=params,
            price=price,
            kind="counter",
        )
        return session.evolve(
            user_price=price,
            messages=session.messages + (message,),
        )

    def awaiting_reply(self, session: NegotiationSession) -> bool:
        """True when the last message is a user offer with no counterpart answer yet."""
        last = session.last_message
        return session.is_active and last is not None and last.sender == "user"

    def apply_counterpart_reply(
        self, session: NegotiationSession
    ) -> tuple[NegotiationSession, CounterpartReply]:
        """
        Answer the user's latest offer.

        reject: prices and round untouched. counter: counterpart price moves,
        round advances. accept: session completes at the user's own offer.
        """
        if not self.awaiting_reply(session):
            raise InvalidSessionStateException(
                "apply counterpart reply", session.status, "no user offer awaiting a reply"
            )
        offer = session.user_price
        reply = self.responder.respond(
            session.role,
            offer,
            session.counterpart_price,
            session.market_price,
            session.round,
            session.language,
        )
        message = Message(
            sender="counterpart",
            text=reply.text,
            text_key=reply.text_key,
            params=reply.params,
            price=reply.new_price,
            kind=reply.kind,
        )
        update = {"messages": session.messages + (message,)}
        if reply.kind == "counter":
            update["counterpart_price"] = reply.new_price
            update["round"] = session.round + 1
        elif reply.kind == "accept":
            update["status"] = "completed"
            update["deal_price"] = offer
            logger.info(
                f"Session {session.session_id} deal at {offer} x {session.quantity} "
                f"after {session.round} round(s)"
            )
        return session.evolve(**update), reply

    def submit_price(self, session: NegotiationSession, price: int) -> NegotiationSession:
        """Validate a numeric offer, record it and apply the counterpart's reply."""
        if not session.is_active:
            raise InvalidSessionStateException("submit offer", session.status)
        price = self.check_offer_price(price, session.language)
        session = self.record_user_offer(session, price)
        session, _ = self.apply_counterpart_reply(session)
        return session

    def submit_offer(self, session: NegotiationSession, raw_input: Optional[str]) -> NegotiationSession:
        """Validate raw text input and run a full offer/reply exchange."""
        if not session.is_active:
            raise InvalidSessionStateException("submit offer", session.status)
        price = self.parse_offer(raw_input, session.language)
        return self.submit_price(session, price)

    # ----- quick actions -----

    def split_price(self, session: NegotiationSession) -> int:
        return round_price((session.user_price + session.counterpart_price) / 2)

    def nudge_price(self, session: NegotiationSession, amount: int = DEFAULT_NUDGE_STEP) -> int:
        """Step toward the counterpart: buyers raise, sellers lower; never below 1."""
        if session.role == "buyer":
            return max(1, session.user_price + amount)
        return max(1, session.user_price - amount)

    def quick_split(self, session: NegotiationSession) -> NegotiationSession:
        self.require_active(session, "split")
        return self.submit_price(session, self.split_price(session))

    def quick_accept(self, session: NegotiationSession) -> NegotiationSession:
        self.require_active(session, "accept counterpart price")
        return self.submit_price(session, session.counterpart_price)

    def quick_nudge(self, session: NegotiationSession, amount: int = DEFAULT_NUDGE_STEP) -> NegotiationSession:
        self.require_active(session, "nudge")
        return self.submit_price(session, self.nudge_price(session, amount))

    @staticmethod
    def require_active(session: NegotiationSession, operation: str):
        if not session.is_active:
            raise InvalidSessionStateException(operation, session.status)

    # ----- coaching -----

    def coaching_tip(self, session: NegotiationSession) -> Optional[CoachingTip]:
        """Tip for an active session; None otherwise."""
        if not session.is_active:
            return None
        return coaching.tip(
            session.user_price, session.counterpart_price, session.market_price, session.language
        )
