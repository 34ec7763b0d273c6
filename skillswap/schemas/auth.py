"""Auth request/response schemas."""

from datetime import date

from pydantic import BaseModel, EmailStr, Field

from skillswap.schemas.common import CamelModel


class RegisterRequest(CamelModel):
    email: EmailStr
    # bcrypt accepts max 72 bytes; longer passwords are rejected up front.
    password: str = Field(..., min_length=1, max_length=72)
    date_of_birth: date | None = None
    name: str | None = Field(default=None, max_length=255)


class LoginRequest(BaseModel):
    email: str
    password: str


class AuthUser(CamelModel):
    id: int
    email: str
    name: str | None = None
    profile_photo: str | None = None


class AuthResponse(BaseModel):
    message: str
    token: str
    user: AuthUser
