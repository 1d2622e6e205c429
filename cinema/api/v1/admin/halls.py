from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from cinema.db.session import get_db
from cinema.api.deps import get_current_admin_user
from cinema.models.user import User
from cinema.models.hall import Hall
from cinema.models.reservation import Reservation
from cinema.schemas.common import MessageResponse
from cinema.schemas.hall import (
    HallCreate,
    HallProgramUpdate,
    HallCapacityUpdate,
    Hall as HallSchema,
)

router = APIRouter(prefix="/admin/halls", tags=["Admin - Halls"])


def _get_hall_or_404(hall_id: UUID, db: Session) -> Hall:
    hall = db.query(Hall).filter(Hall.id == hall_id).first()
    if not hall:
        raise HTTPException(status_code=404, detail="Cinema hall not found")
    return hall


@router.post("/", response_model=HallSchema, status_code=status.HTTP_201_CREATED)
def create_hall(
    data: HallCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user),
):
    hall = Hall(**data.model_dump())
    db.add(hall)
    db.commit()
    db.refresh(hall)
    return hall


@router.patch("/{hall_id}/program", response_model=HallSchema)
def update_hall_program(
    hall_id: UUID,
    data: HallProgramUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user),
):
    """Change the hall name and the program it screens. Always allowed."""
    hall = _get_hall_or_404(hall_id, db)
    for field, value in data.model_dump().items():
        setattr(hall, field, value)
    db.commit()
    db.refresh(hall)
    return hall


@router.patch("/{hall_id}/capacity", response_model=HallSchema)
def update_hall_capacity(
    hall_id: UUID,
    data: HallCapacityUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user),
):
    """
    Resize the seat grid.
    Blocked while the hall has reservations for today or later.
    """
    hall = _get_hall_or_404(hall_id, db)
    active = (
        db.query(Reservation.id)
        .filter(Reservation.hall_id == hall_id, Reservation.reservation_date >= date.today())
        .first()
    )
    if active:
        raise HTTPException(
            status_code=409,
            detail="Cannot update capacity as there are active reservations for this hall",
        )

    hall.rows = data.rows
    hall.columns = data.columns
    db.commit()
    db.refresh(hall)
    return hall


@router.delete("/{hall_id}", response_model=MessageResponse)
def delete_hall(
    hall_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user),
):
    hall = _get_hall_or_404(hall_id, db)
    if db.query(Reservation.id).filter(Reservation.hall_id == hall_id).first():
        raise HTTPException(
            status_code=409,
            detail="Cannot delete hall as there are reservations associated with it",
        )

    db.delete(hall)
    db.commit()
    return MessageResponse(message="Cinema hall deleted successfully", id=str(hall_id))
