"""
Authentication schemas for registration and login.
"""
from typing import Optional

from pydantic import BaseModel, EmailStr, Field


class RegisterRequest(BaseModel):
    """Request model for signing up."""
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=1, description="User password")
    firstName: Optional[str] = Field(None, description="Given name")
    lastName: Optional[str] = Field(None, description="Family name")


class LoginRequest(BaseModel):
    """Request model for email/password login."""
    email: str = Field(..., description="User email address")
    password: str = Field(..., description="User password")


class TokenResponse(BaseModel):
    """Response model for successful authentication."""
    message: str = Field(default="OK")
    token: str = Field(..., description="Token for authenticated requests")


class ErrorResponse(BaseModel):
    """Error response model."""
    message: str = Field(..., description="Error message")
