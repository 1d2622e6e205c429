from datetime import date
from typing import Iterable, Set
from uuid import UUID

from sqlalchemy import and_, or_
from sqlalchemy.orm import Session

from cinema.booking.seat import Seat
from cinema.models.reservation import Reservation


def find_conflicts(db: Session, hall_id: UUID, on_date: date, seats: Iterable[Seat]) -> Set[Seat]:
    """
    Return the requested seats already reserved for this hall and date.

    Must run on the same session as the insert that follows it; the unique
    constraint on reservations still has the final say at commit.
    """
    wanted = set(seats)
    if not wanted:
        return set()

    taken = (
        db.query(Reservation.seat_row, Reservation.seat_column)
        .filter(
            Reservation.hall_id == hall_id,
            Reservation.reservation_date == on_date,
            or_(*[
                and_(Reservation.seat_row == seat.row, Reservation.seat_column == seat.column)
                for seat in wanted
            ]),
        )
        .all()
    )
    return {Seat(row, column) for row, column in taken} & wanted
