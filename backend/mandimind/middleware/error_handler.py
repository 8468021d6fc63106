"""
Global error handling middleware.

WHAT: Translate exceptions to appropriate HTTP responses
WHY: Consistent error responses with proper status codes
HOW: FastAPI exception handlers for custom exceptions
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from datetime import datetime

from ..utils.exceptions import (
    BusinessException,
    CommodityNotFoundException,
    InvalidSessionStateException,
    OfferValidationError,
    ResponsePendingException,
    SessionNotFoundException,
)
from ..utils.logger import get_logger

logger = get_logger(__name__)


async def validation_error_handler(request: Request, exc: RequestValidationError):
    """
    Handle FastAPI RequestValidationError.

    WHAT: Request validation failed
    WHY: Invalid request payload
    HOW: Return 400 with field errors
    """
    logger.warning(f"Validation error: {exc.errors()}")

    # Clean up error details to be JSON serializable
    cleaned_errors = []
    for error in exc.errors():
        cleaned_error = {
            "type": error.get("type"),
            "loc": error.get("loc"),
            "msg": error.get("msg"),
            "input": error.get("input")
        }
        if "ctx" in error:
            cleaned_error["ctx"] = {
                k: str(v) if isinstance(v, Exception) else v
                for k, v in error["ctx"].items()
            }
        cleaned_errors.append(cleaned_error)

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "VALIDATION_ERROR",
            "message": "Request validation failed",
            "details": cleaned_errors,
            "timestamp": datetime.now().isoformat()
        }
    )


async def business_exception_handler(request: Request, exc: BusinessException):
    """
    Handle BusinessException and its subclasses.

    WHAT: Domain error raised by engine or session manager
    WHY: Client shows offer errors inline and recovers from state conflicts
    HOW: Return status code based on exception type
    """
    status_code = status.HTTP_400_BAD_REQUEST

    if isinstance(exc, (SessionNotFoundException, CommodityNotFoundException)):
        status_code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, (InvalidSessionStateException, ResponsePendingException)):
        status_code = status.HTTP_409_CONFLICT
    elif isinstance(exc, OfferValidationError):
        status_code = status.HTTP_400_BAD_REQUEST

    logger.warning(f"Business exception: {exc.code} - {exc.message}")
    return JSONResponse(
        status_code=status_code,
        content={
            "error": exc.code,
            "message": exc.message,
            "details": exc.details,
            "timestamp": datetime.now().isoformat()
        }
    )


def register_exception_handlers(app):
    """
    Register all exception handlers with FastAPI app.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(BusinessException, business_exception_handler)

    logger.info("Exception handlers registered")
