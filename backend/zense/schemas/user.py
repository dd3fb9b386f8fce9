"""
Zense Backend - User & Auth Schemas
====================================

What:  Request bodies for register/login/update and the user projections.
Why no EmailStr: addresses are checked with a single regex so the project
does not need the optional email-validator package.

Projections:
    UserResponse      id, name, email (own profile only), timestamps
    UserAuthResponse  id, name, token (login result)
    UserSummary       id, name (embedded in forums and comments)
"""

import re
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

EMAIL_REGEX = re.compile(r"^[\w\.\+-]+@[\w\.-]+\.\w+$")


def _check_email(value: str) -> str:
    value = value.strip().lower()
    if not EMAIL_REGEX.match(value):
        raise ValueError("Invalid email address")
    return value


class UserRegisterRequest(BaseModel):
    name: str = Field(min_length=4, max_length=16)
    email: str = Field(max_length=255)
    password: str = Field(min_length=8, max_length=32)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return _check_email(v)


class UserLoginRequest(BaseModel):
    email: str
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return _check_email(v)


class UserUpdateRequest(BaseModel):
    """Partial update: only the fields present in the body are written."""
    name: Optional[str] = Field(default=None, min_length=4, max_length=16)
    email: Optional[str] = Field(default=None, max_length=255)
    password: Optional[str] = Field(default=None, min_length=8, max_length=32)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return _check_email(v)


class UserSummary(BaseModel):
    id: int
    name: str

    model_config = {"from_attributes": True}


class UserResponse(BaseModel):
    id: int
    name: str
    email: Optional[str] = Field(default=None, description="Only present on the caller's own profile")
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class UserAuthResponse(BaseModel):
    id: int
    name: str
    token: str = Field(description="HS256 bearer token carrying the user id")
