"""
Custom business exceptions for the negotiation engine.

WHAT: Domain-specific exceptions that map to HTTP status codes
WHY: Consistent error handling across engine, session manager and API
HOW: Custom exception classes with error codes and messages
"""

from typing import Optional, Any


class BusinessException(Exception):
    """Base class for business logic exceptions."""

    def __init__(self, message: str, code: str, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details


class OfferValidationError(BusinessException):
    """Raised when a submitted offer fails input validation."""

    def __init__(self, message_key: str, message: str, raw_input: Optional[str] = None):
        super().__init__(
            message=message,
            code="INVALID_OFFER",
            details={"message_key": message_key, "input": raw_input}
        )
        self.message_key = message_key


class InvalidSessionStateException(BusinessException):
    """Raised when an operation is not allowed in the session's current status."""

    def __init__(self, operation: str, current_status: str, reason: str = ""):
        message = f"Cannot {operation} while session is {current_status}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(
            message=message,
            code="INVALID_SESSION_STATE",
            details={"operation": operation, "current_status": current_status}
        )


class ResponsePendingException(BusinessException):
    """Raised when an offer is submitted while a counterpart reply is pending."""

    def __init__(self, session_id: str):
        super().__init__(
            message=f"Counterpart reply still pending for session: {session_id}",
            code="RESPONSE_PENDING",
            details={"session_id": session_id}
        )


class SessionNotFoundException(BusinessException):
    """Raised when a session is not found."""

    def __init__(self, session_id: str):
        super().__init__(
            message=f"Session not found: {session_id}",
            code="SESSION_NOT_FOUND",
            details={"session_id": session_id}
        )


class CommodityNotFoundException(BusinessException):
    """Raised when a commodity id is not in the catalog."""

    def __init__(self, commodity_id: str):
        super().__init__(
            message=f"Commodity not found: {commodity_id}",
            code="COMMODITY_NOT_FOUND",
            details={"commodity_id": commodity_id}
        )
