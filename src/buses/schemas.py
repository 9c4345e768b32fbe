from pydantic import BaseModel
from typing import Optional
from datetime import datetime
from decimal import Decimal

class BusBase(BaseModel):
    name: str
    from_location: str
    to_location: str
    departure_time: datetime
    total_seats: int
    available_seats: int
    price: Optional[Decimal] = None

class Bus(BusBase):
    id: int

    class Config:
        from_attributes = True
