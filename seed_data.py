#!/usr/bin/env python3

from datetime import datetime, timedelta, time
from decimal import Decimal

from src.database import Base, SessionLocal, engine
from src.models import Booking, Bus

ROUTES = [
    ("Delhi", "Jaipur", Decimal("650.00")),
    ("Jaipur", "Delhi", Decimal("650.00")),
    ("Mumbai", "Pune", Decimal("450.00")),
    ("Pune", "Mumbai", Decimal("450.00")),
    ("Bangalore", "Chennai", Decimal("800.00")),
    ("Chennai", "Bangalore", Decimal("800.00")),
]

DEPARTURES = [time(6, 30), time(13, 0), time(22, 15)]
OPERATORS = ["Express Travels", "Royal Coaches", "Night Rider"]

def create_seed_data(days: int = 7, seats_per_bus: int = 40):
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()

    try:
        print("Creating seed data for Bus Booking System...")

        # Clear existing data (in reverse dependency order)
        print("Clearing existing data...")
        db.query(Booking).delete()
        db.query(Bus).delete()

        print("Creating buses...")
        buses = []
        today = datetime.now().date()
        for day in range(days):
            travel_date = today + timedelta(days=day)
            for from_location, to_location, price in ROUTES:
                for operator, departure in zip(OPERATORS, DEPARTURES):
                    buses.append(Bus(
                        name=operator,
                        from_location=from_location,
                        to_location=to_location,
                        departure_time=datetime.combine(travel_date, departure),
                        total_seats=seats_per_bus,
                        available_seats=seats_per_bus,
                        price=price
                    ))

        db.add_all(buses)
        db.commit()
        print(f"Created {len(buses)} buses over {days} days on {len(ROUTES)} routes")

    except Exception as e:
        print(f"Error creating seed data: {e}")
        db.rollback()
        raise
    finally:
        db.close()

if __name__ == "__main__":
    create_seed_data()
