from datetime import date
from typing import List, Set
from uuid import UUID

from sqlalchemy.orm import Session

from cinema.booking.seat import Seat
from cinema.models.hall import Hall
from cinema.models.reservation import Reservation
from cinema.schemas.reservation import SeatCell

SeatMatrix = List[List[SeatCell]]


def reserved_seats(db: Session, hall_id: UUID, on_date: date) -> Set[Seat]:
    """All seats already held for a hall on a date."""
    rows = (
        db.query(Reservation.seat_row, Reservation.seat_column)
        .filter(
            Reservation.hall_id == hall_id,
            Reservation.reservation_date == on_date,
        )
        .all()
    )
    return {Seat(row, column) for row, column in rows}


def build_seat_matrix(rows: int, columns: int, reserved: Set[Seat]) -> SeatMatrix:
    return [
        [
            SeatCell(row=row, column=column, is_reserved=Seat(row, column) in reserved)
            for column in range(1, columns + 1)
        ]
        for row in range(1, rows + 1)
    ]


def compute_availability(db: Session, hall: Hall, on_date: date) -> SeatMatrix:
    """
    Row-major seat grid for a hall on a date.
    The date is expected to be validated by the caller.
    """
    return build_seat_matrix(hall.rows, hall.columns, reserved_seats(db, hall.id, on_date))
