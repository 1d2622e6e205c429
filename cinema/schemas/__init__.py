from cinema.schemas.common import ErrorResponse, SeatCoordinate, SeatsErrorResponse, MessageResponse
from cinema.schemas.user import User, UserCreate, AdminCreate, Token
from cinema.schemas.hall import (
    Hall, HallCreate, HallProgramUpdate, HallCapacityUpdate, HallWithOccupancy, HallSummary,
)
from cinema.schemas.reservation import (
    SeatRequest, ReservationCreate, SeatCell, SeatMatrixResponse, BookingRecord,
    ReservationGroup, ReservationGroupList, ReservationCancelResponse,
)
