"""
Schemas for POST /api/auth/signup and POST /api/auth/login.

Validation rules mirror the original client contract: any username, a
syntactically valid email, and a password of at least 6 characters.
"""

from typing import Optional

from pydantic import EmailStr, Field

from stackit.schemas.common import CamelModel, UserPublic


class SignupRequest(CamelModel):
    username: str = Field(min_length=1, max_length=150)
    email: EmailStr
    password: str = Field(min_length=6, description="Plain password, at least 6 characters")


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(min_length=6)


class AuthResponse(CamelModel):
    """
    Returned by both signup and login. Only signup sets `message`.
    """
    user: UserPublic
    token: str
    message: Optional[str] = None
