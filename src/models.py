from sqlalchemy import Column, Integer, BigInteger, String, Date, DateTime, Text, ForeignKey, Numeric, CheckConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from src.database import Base

BOOKING_CONFIRMED = "CONFIRMED"

# BigInteger keys fall back to INTEGER on SQLite so autoincrement still works
IdType = BigInteger().with_variant(Integer, "sqlite")
MAX_ROW_ID = 2**63 - 1

# ================================
# Users
# ================================
class User(Base):
    __tablename__ = "users"

    id = Column(IdType, primary_key=True, index=True)
    full_name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password = Column(String(255), nullable=False)
    phone = Column(String(20))
    gender = Column(String(20))
    date_of_birth = Column(Date)
    address = Column(Text)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

# ================================
# Buses & Bookings
# ================================
class Bus(Base):
    __tablename__ = "buses"
    __table_args__ = (
        CheckConstraint("available_seats >= 0", name="ck_buses_available_seats_non_negative"),
        CheckConstraint("available_seats <= total_seats", name="ck_buses_available_seats_within_total"),
    )

    id = Column(IdType, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    from_location = Column(String(255), nullable=False, index=True)
    to_location = Column(String(255), nullable=False, index=True)
    departure_time = Column(DateTime, nullable=False, index=True)
    total_seats = Column(Integer, nullable=False)
    available_seats = Column(Integer, nullable=False)
    price = Column(Numeric(10, 2))
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    bookings = relationship("Booking", back_populates="bus")

class Booking(Base):
    __tablename__ = "bookings"
    __table_args__ = (
        CheckConstraint("status IN ('CONFIRMED', 'CANCELLED')", name="ck_bookings_status"),
    )

    id = Column(IdType, primary_key=True, index=True)
    bus_id = Column(IdType, ForeignKey("buses.id"), nullable=False, index=True)
    passenger_name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, index=True)
    phone = Column(String(20), nullable=False)
    seats = Column(Text, nullable=False)  # comma-joined, in booking order
    total_amount = Column(Numeric(10, 2), nullable=False)
    booking_date = Column(DateTime(timezone=True), server_default=func.now())
    status = Column(String(20), nullable=False, default=BOOKING_CONFIRMED)

    # Relationships
    bus = relationship("Bus", back_populates="bookings")

    @property
    def seat_list(self):
        return [seat for seat in self.seats.split(",") if seat]
