from typing import Optional
from pydantic import BaseModel, EmailStr, UUID4
from datetime import datetime


# Shared properties
class UserBase(BaseModel):
    email: EmailStr
    full_name: str


# Properties to receive via API on creation (POST /auth/register)
class UserCreate(UserBase):
    password: str


# Properties to receive via API on admin creation (POST /auth/admin/register)
class AdminCreate(UserCreate):
    admin_secret: str


class UserInDBBase(UserBase):
    id: UUID4
    role: str
    is_active: bool
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# Properties returned via API
class User(UserInDBBase):
    pass


class Token(BaseModel):
    access_token: str
    token_type: str
    user: User
