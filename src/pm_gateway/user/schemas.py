"""Pydantic request/response schemas for pm_gateway.

All responses are wrapped in ApiResponse at the router layer. The user id
returned here is the identity the exchange uses for creator checks and
position ownership.
"""

import re

from pydantic import BaseModel, EmailStr, Field, field_validator

from src.pm_gateway.user.models import User


class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=3, max_length=64, pattern=r"^[a-zA-Z0-9_]+$")
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)

    @field_validator("password")
    @classmethod
    def password_complexity(cls, v: str) -> str:
        """Enforce: at least one uppercase, one lowercase, one digit."""
        if not re.search(r"[A-Z]", v):
            raise ValueError("Password must contain at least one uppercase letter")
        if not re.search(r"[a-z]", v):
            raise ValueError("Password must contain at least one lowercase letter")
        if not re.search(r"\d", v):
            raise ValueError("Password must contain at least one digit")
        return v


class LoginRequest(BaseModel):
    username: str
    password: str


class UserInfo(BaseModel):
    user_id: str
    username: str
    email: str

    @classmethod
    def from_domain(cls, user: User) -> "UserInfo":
        return cls(user_id=user.id, username=user.username, email=user.email)


class RegisterResponse(UserInfo):
    available_balance: int
    created_at: str


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "Bearer"
    expires_in: int
    user: UserInfo
