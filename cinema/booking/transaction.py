"""
Atomic multi-seat booking and cancellation.

A booking moves through ``BookingState``:

    VALIDATING -> CONFLICT_CHECKING -> INSERTING -> COMMITTED

and falls back to IDLE (rollback) from CONFLICT_CHECKING or INSERTING. The
conflict check is an early, friendly rejection; the unique constraint on
(hall_id, seat_row, seat_column, reservation_date) is what actually keeps two
concurrent bookings off the same seat. Either every seat of a booking is
committed or none is.
"""

import enum
import logging
from datetime import date
from typing import Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from cinema.booking.conflicts import find_conflicts
from cinema.booking.presenter import Renderer, render_proof, reservation_summary
from cinema.booking.unit_of_work import AbstractUnitOfWork
from cinema.booking.validation import check_bounds, validate_request
from cinema.core.exceptions import NotFoundError, SeatConflictError, StorageFailureError
from cinema.models.hall import Hall
from cinema.models.reservation import Reservation
from cinema.schemas.common import SeatCoordinate
from cinema.schemas.reservation import BookingRecord, ReservationCreate
from cinema.utils.qr import render_qr_data_url

logger = logging.getLogger(__name__)


class BookingState(str, enum.Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    CONFLICT_CHECKING = "conflict_checking"
    INSERTING = "inserting"
    COMMITTED = "committed"


def _enter(state: BookingState, user_id: UUID, hall_id: UUID) -> BookingState:
    logger.debug("booking user=%s hall=%s -> %s", user_id, hall_id, state.value)
    return state


def book(
    uow: AbstractUnitOfWork,
    user_id: UUID,
    request: ReservationCreate,
    today: Optional[date] = None,
    render: Renderer = render_qr_data_url,
) -> BookingRecord:
    """
    Reserve every requested seat for the user, or none of them.

    Raises MalformedRequestError, OutOfWindowError, NotFoundError,
    OutOfBoundsError, SeatConflictError or StorageFailureError.
    """
    state = _enter(BookingState.VALIDATING, user_id, request.hall_id)
    validated = validate_request(request, today)

    with uow:
        try:
            hall = uow.session.get(Hall, validated.hall_id)
            if hall is None:
                raise NotFoundError("Cinema hall not found")
            check_bounds(validated.seats, hall)
            hall_name, program_title = hall.name, hall.program_title

            state = _enter(BookingState.CONFLICT_CHECKING, user_id, hall.id)
            taken = find_conflicts(uow.session, hall.id, validated.date, validated.seats)
            if taken:
                logger.info(
                    "Booking rejected: %d seat(s) already reserved in hall %s on %s",
                    len(taken), hall.id, validated.date,
                )
                raise SeatConflictError("Some seats are already reserved", seats=taken)

            state = _enter(BookingState.INSERTING, user_id, hall.id)
            uow.session.add_all([
                Reservation(
                    user_id=user_id,
                    hall_id=validated.hall_id,
                    seat_row=seat.row,
                    seat_column=seat.column,
                    reservation_date=validated.date,
                )
                for seat in validated.seats
            ])
            try:
                uow.session.flush()
                uow.commit()
            except IntegrityError:
                uow.rollback()
                state = _enter(BookingState.IDLE, user_id, validated.hall_id)
                taken = find_conflicts(uow.session, validated.hall_id, validated.date, validated.seats)
                if taken:
                    # A concurrent booking committed one of these seats first
                    logger.warning(
                        "Booking lost a race in hall %s on %s; rolled back", validated.hall_id, validated.date
                    )
                    raise SeatConflictError("Some seats are already reserved", seats=taken) from None
                if uow.session.get(Hall, validated.hall_id) is None:
                    logger.info("Hall %s was removed during booking; rolled back", validated.hall_id)
                    raise NotFoundError("Cinema hall not found") from None
                logger.exception(
                    "Integrity failure while booking hall %s on %s with no seat taken",
                    validated.hall_id, validated.date,
                )
                raise StorageFailureError("Reservation could not be stored, try again later") from None
        except SQLAlchemyError as exc:
            uow.rollback()
            logger.exception(
                "Storage failure while booking hall %s on %s (state=%s)",
                validated.hall_id, validated.date, state.value,
            )
            raise StorageFailureError("Reservation could not be stored, try again later") from exc

    _enter(BookingState.COMMITTED, user_id, validated.hall_id)
    logger.info(
        "User %s reserved %d seat(s) in hall %s on %s",
        user_id, len(validated.seats), validated.hall_id, validated.date,
    )

    summary = reservation_summary(
        user_id, validated.hall_id, hall_name, program_title, validated.date, validated.seats
    )
    return BookingRecord(
        user_id=user_id,
        hall_id=validated.hall_id,
        hall_name=hall_name,
        program_title=program_title,
        date=validated.date,
        seats=[SeatCoordinate(row=seat.row, column=seat.column) for seat in validated.seats],
        qr_code=render_proof(render, summary),
    )


def cancel(uow: AbstractUnitOfWork, user_id: UUID, hall_id: UUID, on_date: date) -> int:
    """
    Remove every seat the user holds in a hall on a date.

    Not limited to the booking window. Returns the number of seats released.
    """
    with uow:
        try:
            deleted = (
                uow.session.query(Reservation)
                .filter(
                    Reservation.user_id == user_id,
                    Reservation.hall_id == hall_id,
                    Reservation.reservation_date == on_date,
                )
                .delete(synchronize_session=False)
            )
            if not deleted:
                raise NotFoundError("No reservations found for this hall and date")
            uow.commit()
        except SQLAlchemyError as exc:
            uow.rollback()
            logger.exception("Storage failure while cancelling hall %s on %s", hall_id, on_date)
            raise StorageFailureError("Reservation could not be cancelled, try again later") from exc

    logger.info("User %s cancelled %d seat(s) in hall %s on %s", user_id, deleted, hall_id, on_date)
    return deleted
