from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.orm import Session
from typing import List
from datetime import date
from src.database import get_db
from src.buses.schemas import Bus
from src.buses.service import BusService
from src.exceptions import NotFoundError
from src.models import MAX_ROW_ID

router = APIRouter()

@router.get("/search", response_model=List[Bus])
def search_buses(
    from_location: str = Query(..., alias="from", min_length=1, description="Origin"),
    to_location: str = Query(..., alias="to", min_length=1, description="Destination"),
    travel_date: date = Query(..., alias="date", description="Departure date (YYYY-MM-DD)"),
    db: Session = Depends(get_db)
):
    """Search buses by origin, destination and departure date"""
    return BusService.search_buses(db, from_location, to_location, travel_date)

@router.get("/{bus_id}", response_model=Bus)
def get_bus(
    bus_id: int = Path(..., gt=0, le=MAX_ROW_ID),
    db: Session = Depends(get_db)
):
    """Get bus details by ID"""
    bus = BusService.get_bus(db, bus_id)
    if not bus:
        raise NotFoundError("Bus not found")
    return bus
