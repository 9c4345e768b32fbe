from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import date, datetime, time, timedelta
from src.models import Bus

class BusService:
    @staticmethod
    def search_buses(db: Session, from_location: str, to_location: str, travel_date: date) -> List[Bus]:
        """Buses on an exact origin/destination pair departing on ``travel_date``.

        Time of day is ignored: the date is matched as the half-open range
        ``[travel_date 00:00, next day 00:00)``.
        """
        day_start = datetime.combine(travel_date, time.min)
        day_end = day_start + timedelta(days=1)

        return db.query(Bus).filter(
            Bus.from_location == from_location,
            Bus.to_location == to_location,
            Bus.departure_time >= day_start,
            Bus.departure_time < day_end
        ).order_by(Bus.departure_time, Bus.id).all()

    @staticmethod
    def get_bus(db: Session, bus_id: int) -> Optional[Bus]:
        """Get bus by ID"""
        return db.query(Bus).filter(Bus.id == bus_id).first()
