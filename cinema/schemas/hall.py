from typing import Optional
from pydantic import BaseModel, Field, UUID4
from datetime import datetime


# Hall Schemas
class HallBase(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    program_title: str = Field(min_length=1, max_length=255)
    poster_url: str = Field(min_length=1, max_length=255)


class HallCreate(HallBase):
    rows: int = Field(ge=1, le=30)
    columns: int = Field(ge=1, le=30)


# PATCH /admin/halls/{id}/program
class HallProgramUpdate(HallBase):
    pass


# PATCH /admin/halls/{id}/capacity
class HallCapacityUpdate(BaseModel):
    rows: int = Field(ge=1, le=30)
    columns: int = Field(ge=1, le=30)


class Hall(HallBase):
    id: UUID4
    rows: int
    columns: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# Hall with occupancy counters (GET /halls)
class HallWithOccupancy(Hall):
    total_capacity: int
    reserved_seats: int = 0
    available_seats: int = 0


# Compact hall for nested responses (seat map)
class HallSummary(BaseModel):
    id: UUID4
    name: str
    program_title: str
    poster_url: str
    rows: int
    columns: int

    class Config:
        from_attributes = True
