"""
Domain-level failures for the booking core.

These are independent of HTTP; the API layer maps each family to a status
code in ``main.create_app``.
"""

from typing import Optional


class TourismError(Exception):
    """Base exception for all booking-core errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(TourismError):
    """Raised when an id or email lookup misses."""

    def __init__(self, entity: str, key: str):
        super().__init__(
            message=f"{entity} not found", details={"entity": entity, "key": key}
        )


class ConflictError(TourismError):
    """Raised when a write would break a uniqueness rule."""


class ForbiddenError(TourismError):
    """Raised when the acting identity does not own the record."""

    def __init__(self, message: str = "Access denied"):
        super().__init__(message=message)


class ValidationFailed(TourismError):
    """Raised when input violates a schema or lifecycle constraint."""


class Unauthenticated(TourismError):
    """Raised when no valid session identity is present."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message=message)


class PaymentError(TourismError):
    """Raised when the payment processor rejects or fails a call."""


class PaymentNotConfigured(PaymentError):
    def __init__(self) -> None:
        super().__init__(message="Payment processor is not configured")
