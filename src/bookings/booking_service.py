import logging
from typing import List, Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from src.bookings.schemas import BookingCreate, BookingStatus, BookingSummary
from src.database import transaction_scope
from src.exceptions import InsufficientSeats, NotFoundError, TransactionError
from src.models import Booking, Bus

logger = logging.getLogger(__name__)

class BookingService:
    """Seat inventory bookkeeping for buses.

    Booking and cancellation each touch two tables and run as a single
    transaction. Seat counts only ever change through guarded updates
    (``... WHERE available_seats >= n``) and a zero row count means the
    guard failed. ``0 <= available_seats <= total_seats`` holds for every bus.
    """

    def __init__(self, db: Session, timeout: Optional[float] = None):
        self.db = db
        self.timeout = timeout

    def create_booking(self, request: BookingCreate) -> Booking:
        """Book ``request.seats`` on a bus; all-or-nothing"""

        bus = self.db.query(Bus).filter(Bus.id == request.bus_id).first()
        if not bus:
            raise NotFoundError("Bus not found")

        seat_count = len(request.seats)

        with transaction_scope(self.db, self.timeout):
            booking = Booking(
                bus_id=request.bus_id,
                passenger_name=request.name,
                email=request.email,
                phone=request.phone,
                seats=",".join(request.seats),
                total_amount=request.total_amount,
                status=BookingStatus.CONFIRMED.value
            )
            try:
                self.db.add(booking)
                self.db.flush()
            except SQLAlchemyError as e:
                raise TransactionError("Booking failed", stage="insert") from e

            try:
                updated = self.db.query(Bus).filter(
                    Bus.id == request.bus_id,
                    Bus.available_seats >= seat_count
                ).update(
                    {Bus.available_seats: Bus.available_seats - seat_count},
                    synchronize_session=False
                )
            except SQLAlchemyError as e:
                raise TransactionError("Seat update failed", stage="seat_update") from e

            if updated == 0:
                logger.info("Rejected booking on bus %s: %d seats requested", request.bus_id, seat_count)
                raise InsufficientSeats()

        logger.info("Booking %s confirmed on bus %s for %d seats", booking.id, request.bus_id, seat_count)
        return booking

    def cancel_booking(self, booking_id: int) -> Booking:
        """Cancel a confirmed booking and release its seats.

        The status flip is itself guarded on ``status = 'CONFIRMED'``, so of
        two concurrent cancellations only one can release the seats.
        """

        with transaction_scope(self.db, self.timeout):
            try:
                flipped = self.db.query(Booking).filter(
                    Booking.id == booking_id,
                    Booking.status == BookingStatus.CONFIRMED.value
                ).update(
                    {Booking.status: BookingStatus.CANCELLED.value},
                    synchronize_session=False
                )
            except SQLAlchemyError as e:
                raise TransactionError("Failed to cancel booking", stage="status_update") from e

            if flipped == 0:
                raise NotFoundError("Booking not found or already cancelled")

            booking = self.db.query(Booking).filter(Booking.id == booking_id).first()
            self.db.refresh(booking)
            seat_count = len(booking.seat_list)

            try:
                released = self.db.query(Bus).filter(
                    Bus.id == booking.bus_id,
                    Bus.available_seats + seat_count <= Bus.total_seats
                ).update(
                    {Bus.available_seats: Bus.available_seats + seat_count},
                    synchronize_session=False
                )
            except SQLAlchemyError as e:
                raise TransactionError("Failed to update seats", stage="seat_update") from e

            if released == 0:
                # Releasing would push the bus past its capacity
                raise TransactionError("Seat inventory out of range", stage="seat_update")

        logger.info("Booking %s cancelled, %d seats released on bus %s", booking_id, seat_count, booking.bus_id)
        return booking

    def get_booking(self, booking_id: int) -> Optional[Booking]:
        """Get booking by ID"""
        return self.db.query(Booking).filter(Booking.id == booking_id).first()

    def list_bookings(self, email: Optional[str] = None) -> List[BookingSummary]:
        """Bookings with their bus details, newest first"""

        query = self.db.query(
            Booking.id,
            Booking.seats,
            Booking.total_amount,
            Booking.booking_date,
            Booking.status,
            Bus.name.label("bus_name"),
            Bus.from_location,
            Bus.to_location,
            Bus.departure_time
        ).join(Bus, Booking.bus_id == Bus.id)

        if email:
            query = query.filter(Booking.email == email)

        rows = query.order_by(Booking.booking_date.desc(), Booking.id.desc()).all()
        return [BookingSummary.model_validate(row) for row in rows]
