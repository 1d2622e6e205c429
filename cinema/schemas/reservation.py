from typing import List, Optional
from pydantic import BaseModel, Field, UUID4
from datetime import date

from cinema.schemas.common import SeatCoordinate
from cinema.schemas.hall import HallSummary


# Reservation - Create (POST /reservations)
# Fields are optional here so that missing values surface as MALFORMED_REQUEST
# from the booking validator rather than as a schema error.
class SeatRequest(BaseModel):
    row: Optional[int] = None
    column: Optional[int] = None


class ReservationCreate(BaseModel):
    hall_id: Optional[UUID4] = None
    date: Optional[str] = Field(None, description="Target date (YYYY-MM-DD)")
    seats: Optional[List[SeatRequest]] = None


# --- Seat Map ---

class SeatCell(BaseModel):
    row: int
    column: int
    is_reserved: bool


class SeatMatrixResponse(BaseModel):
    hall: HallSummary
    date: date
    seats_matrix: List[List[SeatCell]]
    available_dates: List[date]


# Booking - Response (POST /reservations)
class BookingRecord(BaseModel):
    user_id: UUID4
    hall_id: UUID4
    hall_name: str
    program_title: str
    date: date
    seats: List[SeatCoordinate]
    qr_code: Optional[str] = None


# Reservation group - one per hall + date (GET /reservations/my)
class ReservationGroup(BaseModel):
    hall_id: UUID4
    hall_name: str
    program_title: str
    poster_url: str
    date: date
    seats: List[SeatCoordinate]
    qr_code: Optional[str] = None


class ReservationGroupList(BaseModel):
    count: int
    data: List[ReservationGroup]


# Cancel response (DELETE /reservations/{hall_id}/{date})
class ReservationCancelResponse(BaseModel):
    hall_id: UUID4
    date: date
    cancelled_seats: int
