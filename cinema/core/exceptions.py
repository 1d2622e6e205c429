"""Reservation error taxonomy and the FastAPI handlers that render it.

Every error carries a stable ``error_code`` so callers can tell
"pick different seats" (SEAT_CONFLICT) apart from "try again later"
(STORAGE_FAILURE) without parsing messages.
"""

import logging
from typing import Iterable, Optional

from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ReservationError(Exception):
    """Base error for the seat-booking core."""

    error_code = "RESERVATION_ERROR"
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, seats: Optional[Iterable] = None):
        self.message = message
        self.seats = sorted(seats) if seats is not None else None
        super().__init__(message)

    def to_content(self) -> dict:
        content = {"error": self.error_code, "message": self.message}
        if self.seats is not None:
            content["seats"] = [{"row": row, "column": column} for row, column in self.seats]
        return content


class MalformedRequestError(ReservationError):
    error_code = "MALFORMED_REQUEST"


class OutOfWindowError(ReservationError):
    error_code = "OUT_OF_WINDOW"


class OutOfBoundsError(ReservationError):
    error_code = "OUT_OF_BOUNDS"


class SeatConflictError(ReservationError):
    error_code = "SEAT_CONFLICT"
    status_code = status.HTTP_409_CONFLICT


class NotFoundError(ReservationError):
    error_code = "NOT_FOUND"
    status_code = status.HTTP_404_NOT_FOUND


class StorageFailureError(ReservationError):
    error_code = "STORAGE_FAILURE"
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


async def reservation_error_handler(request: Request, exc: ReservationError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s: %s", request.method, request.url.path, exc.message)
    else:
        logger.info("%s %s rejected (%s): %s", request.method, request.url.path, exc.error_code, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_content())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render body/path type errors in the same shape as MALFORMED_REQUEST."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": MalformedRequestError.error_code,
            "message": "Request is malformed",
            "details": jsonable_encoder(exc.errors()),
        },
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "INTERNAL_ERROR", "message": "Server Error"},
    )
