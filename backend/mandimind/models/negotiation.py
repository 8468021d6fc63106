"""
Negotiation domain models.

WHAT: Core data structures for the bargaining session and its message log
WHY: Consistent typing across engine, session manager and API schemas
HOW: Frozen Pydantic v2 models; every engine operation returns a new snapshot
"""

from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import Literal, Any
from datetime import datetime
from uuid import uuid4


Role = Literal["buyer", "seller"]
Language = Literal["en", "hi", "te", "ta", "bn"]
SessionStatus = Literal["selecting", "active", "completed"]
SenderType = Literal["user", "counterpart", "system"]
MessageKind = Literal["message", "offer", "counter", "accept", "reject"]
ReplyKind = Literal["reject", "counter", "accept"]

SUPPORTED_LANGUAGES: tuple[str, ...] = ("en", "hi", "te", "ta", "bn")


class Commodity(BaseModel):
    """A tradeable item from the static catalog."""

    model_config = ConfigDict(frozen=True)

    commodity_id: str
    names: dict[str, str]
    base_price: int = Field(gt=0)  # rupees per unit
    unit: str
    emoji: str = ""

    def name_in(self, language: str) -> str:
        """Localized display name, English when the language is missing."""
        return self.names.get(language) or self.names["en"]


class Message(BaseModel):
    """An entry in the negotiation chat log. Never mutated after append."""

    model_config = ConfigDict(frozen=True)

    message_id: str = Field(default_factory=lambda: str(uuid4()))
    sender: SenderType
    text: str
    text_key: str
    params: dict[str, Any] = Field(default_factory=dict)
    price: int | None = None
    kind: MessageKind = "message"
    timestamp: datetime = Field(default_factory=datetime.utcnow)


class CounterpartReply(BaseModel):
    """Outcome of the response generator for a single user offer."""

    model_config = ConfigDict(frozen=True)

    kind: ReplyKind
    new_price: int
    text_key: str
    params: dict[str, Any] = Field(default_factory=dict)
    variant: int = 0
    text: str = ""
    spread_percent: float = 0.0


class CoachingTip(BaseModel):
    """Short advice derived from the current spread."""

    model_config = ConfigDict(frozen=True)

    text_key: str
    params: dict[str, Any] = Field(default_factory=dict)
    text: str
    spread_percent: float


class NegotiationSession(BaseModel):
    """
    Immutable snapshot of one bargaining session.

    Lifecycle: selecting -> active -> completed. A new deal discards the
    snapshot and starts over in selecting.
    """

    model_config = ConfigDict(frozen=True)

    session_id: str = Field(default_factory=lambda: str(uuid4()))
    language: Language = "en"
    role: Role | None = None
    commodity: Commodity | None = None
    quantity: int = Field(default=50, ge=1)
    market_price: int = Field(default=0, ge=0)
    user_price: int = Field(default=0, ge=0)
    counterpart_price: int = Field(default=0, ge=0)
    round: int = Field(default=0, ge=0)
    status: SessionStatus = "selecting"
    deal_price: int | None = None
    messages: tuple[Message, ...] = ()
    created_at: datetime = Field(default_factory=datetime.utcnow)

    @model_validator(mode="after")
    def check_lifecycle_invariants(self):
        """Deal price exists only for completed sessions; active ones have a market."""
        if (self.deal_price is not None) != (self.status == "completed"):
            raise ValueError("deal_price must be set if and only if status is completed")
        if self.status != "selecting":
            if self.market_price <= 0:
                raise ValueError("market_price must be positive once negotiation starts")
            if self.round < 1:
                raise ValueError("round must be >= 1 once negotiation starts")
        return self

    def evolve(self, **update: Any) -> "NegotiationSession":
        """
        Return a copy with the given fields replaced.

        Unlike model_copy(update=...), the result is fully validated, so the
        lifecycle invariants and field types hold for every transition.
        """
        return NegotiationSession.model_validate({**self.model_dump(), **update})

    @property
    def is_active(self) -> bool:
        return self.status == "active"

    @property
    def deal_total(self) -> int | None:
        if self.deal_price is None:
            return None
        return self.deal_price * self.quantity

    @property
    def last_message(self) -> Message | None:
        return self.messages[-1] if self.messages else None
