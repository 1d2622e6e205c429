from typing import List, Optional
from pydantic import BaseModel


# Error responses
class ErrorResponse(BaseModel):
    error: str
    message: str


class SeatCoordinate(BaseModel):
    row: int
    column: int


class SeatsErrorResponse(ErrorResponse):
    seats: List[SeatCoordinate]


class MessageResponse(BaseModel):
    message: str
    id: Optional[str] = None
