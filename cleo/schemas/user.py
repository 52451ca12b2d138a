"""Pydantic schemas for accounts."""

from __future__ import annotations

from pydantic import BaseModel, field_validator


class UserCreate(BaseModel):
    username: str
    display_name: str
    password: str
    email_addr: str
    pfp_url: str = ""
    user_key: str

    @field_validator("username")
    @classmethod
    def _username(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Username must not be empty")
        return v

    @field_validator("email_addr")
    @classmethod
    def _email(cls, v: str) -> str:
        v = v.strip()
        if "@" not in v:
            raise ValueError("Invalid email address")
        return v

    @field_validator("password")
    @classmethod
    def _password(cls, v: str) -> str:
        if not v:
            raise ValueError("Password must not be empty")
        return v


class UserCredentials(BaseModel):
    username: str
    password: str


class UserRead(BaseModel):
    """A user as clients see it: never the password hash."""

    user_id: str
    username: str
    display_name: str
    email_addr: str
    pfp_url: str
    is_verified: bool
    is_admin: bool

    model_config = {"from_attributes": True}


class UserCreationResponse(UserRead):
    key_status_updated: bool


class UserList(BaseModel):
    users: list[UserRead]
