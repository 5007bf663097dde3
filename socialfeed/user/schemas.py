"""
Pydantic schemas for reading and updating user accounts.
"""
from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from socialfeed.db.models.user import User


class UserRead(BaseModel):
    """Schema for reading user details."""
    id: str
    email: str
    firstName: Optional[str] = None
    lastName: Optional[str] = None

    @classmethod
    def from_model(cls, user: User) -> "UserRead":
        return cls(
            id=str(user.id),
            email=user.email,
            firstName=user.first_name,
            lastName=user.last_name,
        )


class UserUpdate(BaseModel):
    """Partial profile update; only the fields sent are applied."""
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(None, min_length=1)
    firstName: Optional[str] = None
    lastName: Optional[str] = None


class UserResponse(BaseModel):
    message: str = "OK"
    user: UserRead


class MeResponse(BaseModel):
    user: UserRead
    token: str


class MessageResponse(BaseModel):
    message: str = "OK"
    token: Optional[str] = None
