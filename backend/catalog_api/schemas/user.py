"""
Catalog API — User & Auth Schemas
===================================

What:  Credentials payload shared by register and login, plus the public
       user projection and the login token response.

UserResponse has no password/hash field: the stored bcrypt
hash never appears in any response body.
"""

import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, EmailStr, Field, field_validator


class UserCredentials(BaseModel):
    """
    What:  Body of POST /auth/register and POST /auth/login.

    email: must be a syntactically valid address; lowercased so that
           "Admin@Mail.com" and "admin@mail.com" are the same account.
    password: any non-empty string (no strength policy).
    """
    email: EmailStr
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()


class UserResponse(BaseModel):
    """Public view of a user record."""
    id: uuid.UUID
    email: str
    created_at: datetime

    model_config = {"from_attributes": True}


class UserCreatedResponse(BaseModel):
    """201 body of POST /auth/register."""
    status: Literal["success"] = "success"
    data: UserResponse


class TokenResponse(BaseModel):
    """200 body of POST /auth/login."""
    status: Literal["success"] = "success"
    token: str = Field(description="Signed bearer token, valid for one hour")
