"""
Negotiation endpoints.

WHAT: Session lifecycle, offers, quick actions and coaching for the browser client
WHY: Expose the bargaining engine as a small JSON contract
HOW: FastAPI router delegating to session_manager; domain errors are
     translated by the global exception handlers
"""

from fastapi import APIRouter, HTTPException, status
from typing import Optional

from ....models.api_schemas import (
    ChangeLanguageRequest,
    ChooseCommodityRequest,
    ChooseRoleRequest,
    CoachingTipResponse,
    CreateSessionRequest,
    NudgeRequest,
    SessionSnapshotResponse,
    SubmitOfferRequest,
)
from ....core.session_manager import session_manager
from ....utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter()


def build_snapshot(session_id: str) -> SessionSnapshotResponse:
    """
    Assemble the client view of a session.

    WHAT: Snapshot plus derived fields (tip, split price, pending flag)
    WHY: Client renders quick-action buttons and the coach banner from these
    HOW: Read current snapshot from the manager and enrich it
    """
    session = session_manager.get_session(session_id)
    engine = session_manager.engine
    active = session.is_active
    return SessionSnapshotResponse.from_session(
        session,
        tip=engine.coaching_tip(session),
        split_price=engine.split_price(session) if active else None,
        awaiting_reply=session_manager.is_pending(session_id),
    )


@router.post("/negotiation/sessions", response_model=SessionSnapshotResponse, status_code=status.HTTP_201_CREATED)
async def create_session(request: Optional[CreateSessionRequest] = None):
    """Create a session in the selecting state."""
    language = request.language if request else None
    session = session_manager.create_session(language)
    return build_snapshot(session.session_id)


@router.get("/negotiation/sessions/{session_id}", response_model=SessionSnapshotResponse)
async def get_session(session_id: str):
    return build_snapshot(session_id)


@router.delete("/negotiation/sessions/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_session(session_id: str):
    session_manager.delete_session(session_id)


@router.post("/negotiation/sessions/{session_id}/role", response_model=SessionSnapshotResponse)
async def choose_role(session_id: str, request: ChooseRoleRequest):
    session_manager.choose_role(session_id, request.role)
    return build_snapshot(session_id)


@router.post("/negotiation/sessions/{session_id}/commodity", response_model=SessionSnapshotResponse)
async def choose_commodity(session_id: str, request: ChooseCommodityRequest):
    """
    Pick the commodity and open the negotiation.

    WHAT: Draw market price, set opening prices, append counterpart's first offer
    WHY: Role + commodity are all the engine needs to start bargaining
    HOW: session_manager.choose_commodity -> engine.choose_commodity
    """
    session_manager.choose_commodity(session_id, request.commodity_id)
    return build_snapshot(session_id)


@router.post("/negotiation/sessions/{session_id}/offer", response_model=SessionSnapshotResponse)
async def submit_offer(session_id: str, request: SubmitOfferRequest):
    """
    Submit a typed offer.

    WHAT: Validate input, record the user's offer, wait, append the reply
    WHY: Main bargaining step
    HOW: Invalid input -> 400 INVALID_OFFER with a localized message and no
         state change; otherwise the snapshot after the counterpart's reply
    """
    await session_manager.submit_offer(session_id, request.price)
    return build_snapshot(session_id)


@router.post("/negotiation/sessions/{session_id}/quick/split", response_model=SessionSnapshotResponse)
async def quick_split(session_id: str):
    await session_manager.quick_split(session_id)
    return build_snapshot(session_id)


@router.post("/negotiation/sessions/{session_id}/quick/accept", response_model=SessionSnapshotResponse)
async def quick_accept(session_id: str):
    await session_manager.quick_accept(session_id)
    return build_snapshot(session_id)


@router.post("/negotiation/sessions/{session_id}/quick/nudge", response_model=SessionSnapshotResponse)
async def quick_nudge(session_id: str, request: Optional[NudgeRequest] = None):
    amount = request.amount if request else NudgeRequest().amount
    await session_manager.quick_nudge(session_id, amount)
    return build_snapshot(session_id)


@router.get("/negotiation/sessions/{session_id}/tip", response_model=CoachingTipResponse)
async def get_coaching_tip(session_id: str):
    """Coaching tip for an active session; 409 when there is nothing to coach."""
    tip = session_manager.coaching_tip(session_id)
    if tip is None:
        current = session_manager.get_session(session_id)
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={"error": {"code": "NO_ACTIVE_NEGOTIATION",
                              "message": f"No coaching tip while session is {current.status}"}}
        )
    return CoachingTipResponse.from_tip(tip)


@router.put("/negotiation/sessions/{session_id}/language", response_model=SessionSnapshotResponse)
async def change_language(session_id: str, request: ChangeLanguageRequest):
    session_manager.set_language(session_id, request.language)
    return build_snapshot(session_id)


@router.post("/negotiation/sessions/{session_id}/reset", response_model=SessionSnapshotResponse)
async def reset_session(session_id: str):
    """Start a new deal: back to selecting, pending replies are dropped."""
    session_manager.reset_session(session_id)
    return build_snapshot(session_id)
