"""Pydantic schemas for API tokens."""

from __future__ import annotations

from pydantic import BaseModel


class APITokenResponse(BaseModel):
    token_id: str
    token: str

    model_config = {"from_attributes": True}


class TokenDelete(BaseModel):
    token: str
    username: str
    password: str
