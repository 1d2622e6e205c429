import logging
from datetime import date
from typing import Callable, Iterable, List, NamedTuple, Optional, Sequence
from uuid import UUID

from sqlalchemy.orm import Session

from cinema.booking.seat import Seat
from cinema.models.hall import Hall
from cinema.models.reservation import Reservation
from cinema.schemas.common import SeatCoordinate
from cinema.schemas.reservation import ReservationGroup
from cinema.utils.qr import render_qr_data_url

logger = logging.getLogger(__name__)

Renderer = Callable[[dict], str]


class ReservationRow(NamedTuple):
    hall_id: UUID
    hall_name: str
    program_title: str
    poster_url: str
    reservation_date: date
    seat_row: int
    seat_column: int


def reservation_summary(
    user_id: UUID,
    hall_id: UUID,
    hall_name: str,
    program_title: str,
    on_date: date,
    seats: Sequence[Seat],
) -> dict:
    """JSON-safe summary encoded into the QR proof of a booking."""
    return {
        "user_id": str(user_id),
        "hall_id": str(hall_id),
        "hall_name": hall_name,
        "program_title": program_title,
        "date": on_date.isoformat(),
        "seats": [{"row": seat.row, "column": seat.column} for seat in seats],
    }


def render_proof(render: Renderer, summary: dict) -> Optional[str]:
    """Render a QR payload; a failure here never invalidates a reservation."""
    try:
        return render(summary)
    except Exception:
        logger.exception(
            "QR rendering failed for hall %s on %s", summary["hall_id"], summary["date"]
        )
        return None


def group_reservations(rows: Iterable[ReservationRow]) -> List[ReservationGroup]:
    """
    Group flat reservation rows into one entry per (hall, date).

    Ordered by date, hall name, then seat row and column.
    """
    ordered = sorted(
        rows,
        key=lambda r: (r.reservation_date, r.hall_name, str(r.hall_id), r.seat_row, r.seat_column),
    )

    groups: dict[tuple, ReservationGroup] = {}
    for r in ordered:
        key = (r.hall_id, r.reservation_date)
        if key not in groups:
            groups[key] = ReservationGroup(
                hall_id=r.hall_id,
                hall_name=r.hall_name,
                program_title=r.program_title,
                poster_url=r.poster_url,
                date=r.reservation_date,
                seats=[],
            )
        groups[key].seats.append(SeatCoordinate(row=r.seat_row, column=r.seat_column))

    return list(groups.values())


def list_for_user(
    db: Session,
    user_id: UUID,
    today: Optional[date] = None,
    render: Renderer = render_qr_data_url,
) -> List[ReservationGroup]:
    """Upcoming reservations of a user, one group (and one QR code) per hall and date."""
    today = today or date.today()
    rows = (
        db.query(
            Reservation.hall_id,
            Hall.name,
            Hall.program_title,
            Hall.poster_url,
            Reservation.reservation_date,
            Reservation.seat_row,
            Reservation.seat_column,
        )
        .join(Hall, Hall.id == Reservation.hall_id)
        .filter(
            Reservation.user_id == user_id,
            Reservation.reservation_date >= today,
        )
        .all()
    )

    groups = group_reservations(ReservationRow(*row) for row in rows)
    for group in groups:
        summary = reservation_summary(
            user_id,
            group.hall_id,
            group.hall_name,
            group.program_title,
            group.date,
            [Seat(s.row, s.column) for s in group.seats],
        )
        group.qr_code = render_proof(render, summary)
    return groups
