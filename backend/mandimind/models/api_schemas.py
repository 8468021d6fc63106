"""
Pydantic API schemas for the negotiation endpoints.

WHAT: Request and response models for FastAPI
WHY: Type-safe validation and serialization matching the browser client
HOW: Pydantic v2 models; responses are built from NegotiationSession snapshots
"""

from typing import Optional, List, Dict, Any
from pydantic import BaseModel, Field
from datetime import datetime

from ..models.negotiation import (
    CoachingTip,
    Language,
    MessageKind,
    NegotiationSession,
    Role,
    SenderType,
    SessionStatus,
)


# ========== Requests ==========

class CreateSessionRequest(BaseModel):
    """Create a new negotiation session."""
    language: Optional[Language] = Field(default=None, description="Display language (defaults to DEFAULT_LANGUAGE)")


class ChooseRoleRequest(BaseModel):
    role: Role


class ChooseCommodityRequest(BaseModel):
    commodity_id: str = Field(..., min_length=1, max_length=50)


class SubmitOfferRequest(BaseModel):
    """Raw text from the price input box; validated by the engine, not here."""
    price: Optional[str] = Field(default=None, max_length=50)


class NudgeRequest(BaseModel):
    amount: int = Field(default=5, ge=1, le=1000, description="Rupees to move toward the counterpart")


class ChangeLanguageRequest(BaseModel):
    language: Language


# ========== Responses ==========

class CommodityInfo(BaseModel):
    commodity_id: str
    name: str
    names: Dict[str, str]
    base_price: int
    unit: str
    emoji: str


class MessageResponse(BaseModel):
    message_id: str
    sender: SenderType
    text: str
    text_key: str
    params: Dict[str, Any] = Field(default_factory=dict)
    price: Optional[int] = None
    kind: MessageKind
    timestamp: datetime


class CoachingTipResponse(BaseModel):
    text: str
    text_key: str
    params: Dict[str, Any] = Field(default_factory=dict)
    spread_percent: float

    @classmethod
    def from_tip(cls, tip: CoachingTip) -> "CoachingTipResponse":
        return cls(**tip.model_dump())


class SessionSnapshotResponse(BaseModel):
    """Full session state as rendered by the client."""
    session_id: str
    language: Language
    role: Optional[Role] = None
    commodity: Optional[CommodityInfo] = None
    quantity: int
    market_price: Optional[int] = None
    user_price: Optional[int] = None
    counterpart_price: Optional[int] = None
    round: int
    status: SessionStatus
    deal_price: Optional[int] = None
    deal_total: Optional[int] = None
    split_price: Optional[int] = None
    awaiting_reply: bool = False
    coaching_tip: Optional[CoachingTipResponse] = None
    messages: List[MessageResponse] = Field(default_factory=list)

    @classmethod
    def from_session(
        cls,
        session: NegotiationSession,
        tip: Optional[CoachingTip] = None,
        split_price: Optional[int] = None,
        awaiting_reply: bool = False,
    ) -> "SessionSnapshotResponse":
        started = session.status != "selecting"
        commodity = None
        if session.commodity is not None:
            commodity = CommodityInfo(
                commodity_id=session.commodity.commodity_id,
                name=session.commodity.name_in(session.language),
                names=session.commodity.names,
                base_price=session.commodity.base_price,
                unit=session.commodity.unit,
                emoji=session.commodity.emoji,
            )
        return cls(
            session_id=session.session_id,
            language=session.language,
            role=session.role,
            commodity=commodity,
            quantity=session.quantity,
            market_price=session.market_price if started else None,
            user_price=session.user_price if started else None,
            counterpart_price=session.counterpart_price if started else None,
            round=session.round,
            status=session.status,
            deal_price=session.deal_price,
            deal_total=session.deal_total,
            split_price=split_price,
            awaiting_reply=awaiting_reply,
            coaching_tip=CoachingTipResponse.from_tip(tip) if tip else None,
            messages=[MessageResponse(**m.model_dump()) for m in session.messages],
        )


class HealthResponse(BaseModel):
    status: str
    app: str
    version: str
    active_sessions: int
    timestamp: datetime
