"""User Schemas — shapes for the Security and Request/Response Models sections.

Invariants:
    - UserOut never carries a password field (response_model filters it out)
    - Token.token_type is always "bearer"
"""

from typing import Literal

from pydantic import BaseModel, EmailStr, Field


class UserIn(BaseModel):
    username: str = Field(min_length=3, max_length=30, pattern=r"^[a-zA-Z0-9_]+$")
    password: str = Field(min_length=8, max_length=128)
    email: EmailStr
    full_name: str | None = None


class UserOut(BaseModel):
    username: str
    email: EmailStr
    full_name: str | None = None


class UserPublic(BaseModel):
    """Authenticated user as seen by /users/me."""
    username: str
    email: str | None = None
    full_name: str | None = None
    disabled: bool = False


class Token(BaseModel):
    access_token: str
    token_type: Literal["bearer"] = "bearer"
    expires_in: int
