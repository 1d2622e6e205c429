"""
Booking request validation.

Checks run in a fixed order and stop at the first failing category:

1. the request is well-formed (hall, date, at least one seat, both
   coordinates on every seat, no seat repeated);
2. the date is a real calendar date written as ``YYYY-MM-DD``;
3. the date lies in the rolling window ``today + 1 .. today + N``;
4. every seat lies inside the hall.

Checks 1-3 need no hall and run in :func:`validate_request`; check 4 needs
the resolved hall and runs in :func:`check_bounds`. Nothing here touches
storage.
"""

import re
from collections import Counter
from datetime import date, timedelta
from typing import Iterable, List, NamedTuple, Optional, Tuple
from uuid import UUID

from cinema.booking.seat import Seat
from cinema.core.config import settings
from cinema.core.exceptions import MalformedRequestError, OutOfBoundsError, OutOfWindowError
from cinema.models.hall import Hall
from cinema.schemas.reservation import ReservationCreate

DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


class ValidatedRequest(NamedTuple):
    hall_id: UUID
    date: date
    seats: List[Seat]


def booking_window(today: Optional[date] = None) -> Tuple[date, date]:
    """First and last bookable dates, both inclusive."""
    today = today or date.today()
    return today + timedelta(days=1), today + timedelta(days=settings.BOOKING_WINDOW_DAYS)


def available_dates(today: Optional[date] = None) -> List[date]:
    first, last = booking_window(today)
    return [first + timedelta(days=offset) for offset in range((last - first).days + 1)]


def parse_date(value: Optional[str]) -> date:
    if not value or not DATE_PATTERN.fullmatch(value):
        raise MalformedRequestError("Invalid date format. Use YYYY-MM-DD")
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise MalformedRequestError(f"Invalid date: {value}") from None


def check_window(target: date, today: Optional[date] = None) -> None:
    first, last = booking_window(today)
    if not first <= target <= last:
        raise OutOfWindowError(
            f"Date must be within the next {settings.BOOKING_WINDOW_DAYS} days "
            f"({first.isoformat()} to {last.isoformat()})"
        )


def parse_booking_date(value: Optional[str], today: Optional[date] = None) -> date:
    target = parse_date(value)
    check_window(target, today)
    return target


def validate_request(request: ReservationCreate, today: Optional[date] = None) -> ValidatedRequest:
    if request.hall_id is None or not request.date or not request.seats:
        raise MalformedRequestError("Please provide hall_id, date and seats")

    if any(seat.row is None or seat.column is None for seat in request.seats):
        raise MalformedRequestError("Each seat must have row and column")

    seats = [Seat(seat.row, seat.column) for seat in request.seats]
    repeated = [seat for seat, count in Counter(seats).items() if count > 1]
    if repeated:
        raise MalformedRequestError("A seat may appear only once per booking", seats=repeated)

    target = parse_booking_date(request.date, today)
    return ValidatedRequest(hall_id=request.hall_id, date=target, seats=seats)


def check_bounds(seats: Iterable[Seat], hall: Hall) -> None:
    outside = [
        seat for seat in seats
        if not (1 <= seat.row <= hall.rows and 1 <= seat.column <= hall.columns)
    ]
    if outside:
        listed = ", ".join(f"({seat.row}, {seat.column})" for seat in sorted(outside))
        raise OutOfBoundsError(
            f"Seat(s) {listed} out of bounds for a {hall.rows}x{hall.columns} hall",
            seats=outside,
        )
