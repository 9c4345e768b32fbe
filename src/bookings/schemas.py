from pydantic import BaseModel, EmailStr, Field, validator
from typing import List, Optional
from datetime import datetime
from decimal import Decimal
from enum import Enum
from src.models import MAX_ROW_ID

MAX_SEATS_PER_BOOKING = 20

class BookingStatus(str, Enum):
    """Booking status enumeration"""
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"

class BookingCreate(BaseModel):
    """Seat booking request as sent by the booking form"""
    bus_id: int = Field(..., alias="busId", gt=0, le=MAX_ROW_ID)
    seats: List[str]
    total_amount: Decimal = Field(..., alias="totalAmount", ge=0, max_digits=10, decimal_places=2)
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    phone: str = Field(..., min_length=1, max_length=20)

    class Config:
        populate_by_name = True

    @validator('seats')
    def validate_seats(cls, v):
        if not v:
            raise ValueError('At least one seat is required')
        if len(v) > MAX_SEATS_PER_BOOKING:
            raise ValueError(f'Maximum {MAX_SEATS_PER_BOOKING} seats per booking')

        seats = [seat.strip() for seat in v]
        if any(not seat for seat in seats):
            raise ValueError('Seat labels must not be blank')
        if any("," in seat for seat in seats):
            raise ValueError('Seat labels must not contain commas')
        if len(set(seats)) != len(seats):
            raise ValueError('Seat labels must be unique')
        return seats

class BookingCreated(BaseModel):
    success: bool = True
    booking_id: int = Field(..., alias="bookingId")

    class Config:
        populate_by_name = True

class Booking(BaseModel):
    id: int
    bus_id: int
    passenger_name: str
    email: str
    phone: str
    seats: str
    total_amount: Decimal
    booking_date: Optional[datetime] = None
    status: BookingStatus

    class Config:
        from_attributes = True

class BookingSummary(BaseModel):
    """Booking joined with the bus it is on, as listed in booking history"""
    id: int
    seats: str
    total_amount: Decimal
    booking_date: Optional[datetime] = None
    status: BookingStatus
    bus_name: str
    from_location: str
    to_location: str
    departure_time: datetime

    class Config:
        from_attributes = True

class CancellationResponse(BaseModel):
    message: str = "Booking cancelled successfully"
