"""
Status and health check endpoints.

WHAT: Health monitoring for the negotiation service
WHY: Quick diagnostics for the frontend and ops
HOW: Report app metadata and the number of cached sessions
"""

from fastapi import APIRouter
from datetime import datetime

from ....core.config import settings
from ....core.session_manager import session_manager
from ....models.api_schemas import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Overall application health check.

    Returns:
        JSON with status, version and active session count
    """
    return HealthResponse(
        status="healthy",
        app=settings.APP_NAME,
        version=settings.APP_VERSION,
        active_sessions=session_manager.session_count(),
        timestamp=datetime.now(),
    )
