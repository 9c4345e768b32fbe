from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from src.database import get_db
from src.bookings.schemas import (
    Booking, BookingCreate, BookingCreated, BookingSummary, CancellationResponse
)
from src.bookings.booking_service import BookingService
from src.exceptions import NotFoundError
from src.models import MAX_ROW_ID

router = APIRouter()

@router.post("/bookings", response_model=BookingCreated)
def create_booking(
    request: BookingCreate,
    db: Session = Depends(get_db)
):
    """Book seats on a bus"""
    booking = BookingService(db).create_booking(request)
    return BookingCreated(booking_id=booking.id)

@router.get("/bookings/{booking_id}", response_model=Booking)
def get_booking(
    booking_id: int = Path(..., gt=0, le=MAX_ROW_ID),
    db: Session = Depends(get_db)
):
    """Get booking details by ID"""
    booking = BookingService(db).get_booking(booking_id)
    if not booking:
        raise NotFoundError("Booking not found")
    return booking

@router.get("/my-bookings", response_model=List[BookingSummary])
def list_bookings(
    email: Optional[str] = Query(None, description="Only bookings made with this email"),
    db: Session = Depends(get_db)
):
    """Booking history with bus details, newest first"""
    return BookingService(db).list_bookings(email=email)

@router.post("/cancel-booking/{booking_id}", response_model=CancellationResponse)
def cancel_booking(
    booking_id: int = Path(..., gt=0, le=MAX_ROW_ID),
    db: Session = Depends(get_db)
):
    """Cancel a confirmed booking and release its seats"""
    BookingService(db).cancel_booking(booking_id)
    return CancellationResponse()
