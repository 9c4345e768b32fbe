"""
Seat Booking Module

Booking and cancellation of bus seats. Both operations update the booking
and the bus seat inventory in one transaction; seat counts change only
through guarded updates so concurrent bookings can never oversell a bus.

Key Components:
- booking_service.py: Transactional booking, cancellation and booking history
- router.py: FastAPI endpoints for bookings
- schemas.py: Pydantic models for booking requests and responses
"""

from .router import router
from .booking_service import BookingService
from .schemas import (
    BookingCreate, BookingCreated, Booking, BookingSummary, BookingStatus,
    CancellationResponse
)

__all__ = [
    "router",
    "BookingService",
    "BookingCreate",
    "BookingCreated",
    "Booking",
    "BookingSummary",
    "BookingStatus",
    "CancellationResponse"
]
