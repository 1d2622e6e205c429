from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from cinema.db.session import get_db
from cinema.api.deps import get_current_user
from cinema.booking import transaction
from cinema.booking.availability import compute_availability
from cinema.booking.presenter import list_for_user
from cinema.booking.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from cinema.booking.validation import available_dates, parse_booking_date, parse_date
from cinema.core.exceptions import NotFoundError
from cinema.models.user import User
from cinema.models.hall import Hall
from cinema.schemas.common import ErrorResponse, SeatsErrorResponse
from cinema.schemas.hall import HallSummary
from cinema.schemas.reservation import (
    BookingRecord,
    ReservationCancelResponse,
    ReservationCreate,
    ReservationGroupList,
    SeatMatrixResponse,
)

router = APIRouter(prefix="/reservations", tags=["Reservations"])


# ---------------------------------------------------------------------------
# GET /reservations/seats/{hall_id}/{reservation_date} - seat map
# ---------------------------------------------------------------------------


@router.get(
    "/seats/{hall_id}/{reservation_date}",
    response_model=SeatMatrixResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def get_seat_matrix(
    hall_id: UUID,
    reservation_date: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Seat grid of a hall for one bookable date, with the list of bookable dates."""
    today = date.today()
    target = parse_booking_date(reservation_date, today)

    hall = db.query(Hall).filter(Hall.id == hall_id).first()
    if not hall:
        raise NotFoundError("Cinema hall not found")

    return SeatMatrixResponse(
        hall=HallSummary.model_validate(hall),
        date=target,
        seats_matrix=compute_availability(db, hall, target),
        available_dates=available_dates(today),
    )


# ---------------------------------------------------------------------------
# POST /reservations - book seats
# ---------------------------------------------------------------------------


@router.post(
    "/",
    response_model=BookingRecord,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": SeatsErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": SeatsErrorResponse},
        503: {"model": ErrorResponse},
    },
)
def create_reservation(
    data: ReservationCreate,
    uow: AbstractUnitOfWork = Depends(get_unit_of_work),
    current_user: User = Depends(get_current_user),
):
    """
    Reserve one or more seats in a hall for a date in the booking window.
    All seats are reserved together or not at all.
    """
    return transaction.book(uow, current_user.id, data)


# ---------------------------------------------------------------------------
# GET /reservations/my - upcoming reservations grouped by hall and date
# ---------------------------------------------------------------------------


@router.get("/my", response_model=ReservationGroupList)
def list_my_reservations(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    groups = list_for_user(db, current_user.id)
    return ReservationGroupList(count=len(groups), data=groups)


# ---------------------------------------------------------------------------
# DELETE /reservations/{hall_id}/{reservation_date} - cancel a hall + date group
# ---------------------------------------------------------------------------


@router.delete(
    "/{hall_id}/{reservation_date}",
    response_model=ReservationCancelResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def cancel_reservation(
    hall_id: UUID,
    reservation_date: str,
    uow: AbstractUnitOfWork = Depends(get_unit_of_work),
    current_user: User = Depends(get_current_user),
):
    """Release every seat the user holds in the hall on that date."""
    target = parse_date(reservation_date)
    cancelled = transaction.cancel(uow, current_user.id, hall_id, target)
    return ReservationCancelResponse(hall_id=hall_id, date=target, cancelled_seats=cancelled)
