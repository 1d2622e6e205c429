from datetime import date
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import func
from sqlalchemy.orm import Session

from cinema.db.session import get_db
from cinema.api.deps import get_current_user
from cinema.models.user import User
from cinema.models.hall import Hall
from cinema.models.reservation import Reservation
from cinema.schemas.hall import HallWithOccupancy

router = APIRouter(prefix="/halls", tags=["Halls"])


def upcoming_reservation_counts(db: Session, hall_ids: List[UUID]) -> dict:
    """hall_id -> number of seats reserved from today onwards."""
    if not hall_ids:
        return {}
    rows = (
        db.query(Reservation.hall_id, func.count(Reservation.id))
        .filter(
            Reservation.hall_id.in_(hall_ids),
            Reservation.reservation_date >= date.today(),
        )
        .group_by(Reservation.hall_id)
        .all()
    )
    return dict(rows)


def _with_occupancy(hall: Hall, reserved: int) -> HallWithOccupancy:
    item = HallWithOccupancy.model_validate(hall)
    item.reserved_seats = reserved
    item.available_seats = hall.total_capacity - reserved
    return item


@router.get("/", response_model=List[HallWithOccupancy])
def list_halls(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """All halls with their capacity and upcoming occupancy."""
    halls = db.query(Hall).order_by(Hall.name).all()
    counts = upcoming_reservation_counts(db, [h.id for h in halls])
    return [_with_occupancy(h, counts.get(h.id, 0)) for h in halls]


@router.get("/{hall_id}", response_model=HallWithOccupancy)
def get_hall(
    hall_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    hall = db.query(Hall).filter(Hall.id == hall_id).first()
    if not hall:
        raise HTTPException(status_code=404, detail="Cinema hall not found")
    counts = upcoming_reservation_counts(db, [hall.id])
    return _with_occupancy(hall, counts.get(hall.id, 0))
