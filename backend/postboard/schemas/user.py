"""
Postboard API: User Schemas
============================

What:  pydantic models for the User entity and its create/update/login/query variants.
Who:   FastAPI validates request bodies against them; UserService stores `User`.

Field rules:
    email     valid address, unique across users (checked by UserService)
    password  at least 6 characters, stored and returned in plaintext
    name      1-100 characters
    age       optional integer, 18-120
"""

from typing import Optional

from pydantic import EmailStr, Field

from postboard.schemas.common import CamelModel, PageQuery, UUIDStr


class User(CamelModel):
    """
    A stored user.

    The password is part of the entity and of every user response. This leaks
    credentials and is a known weakness of the API contract.
    """

    id: UUIDStr = Field(description="Server-generated UUID")
    email: EmailStr
    password: str
    name: str
    age: Optional[int] = None
    created_at: str = Field(description="ISO-8601 UTC creation time")
    updated_at: str = Field(description="ISO-8601 UTC time of the last update")


class UserCreate(CamelModel):
    email: EmailStr = Field(examples=["a@b.com"])
    password: str = Field(min_length=6, examples=["secret1"])
    name: str = Field(min_length=1, max_length=100, examples=["A"])
    age: Optional[int] = Field(default=None, ge=18, le=120, strict=True)


class UserUpdate(CamelModel):
    """Merge payload: only fields present (and non-null) in the body change."""

    email: Optional[EmailStr] = None
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    age: Optional[int] = Field(default=None, ge=18, le=120, strict=True)


class LoginRequest(UserCreate):
    """
    Login body.

    Login is validated against the full create schema, so `name` is required
    here even though only email and password are checked.
    """


class TokenResponse(CamelModel):
    token: str = Field(description="Bearer token for the Authorization header")


class UserQuery(PageQuery):
    """Query parameters for GET /users."""

    search: Optional[str] = Field(
        default=None, description="Case-insensitive substring of name or email"
    )
