"""Pydantic schemas for signup keys."""

from __future__ import annotations

from pydantic import BaseModel


class KeyCreate(BaseModel):
    api_token: str
    key_type: str
    username: str


class KeyDelete(BaseModel):
    api_token: str
    key_id: str


class KeyRead(BaseModel):
    key_id: str
    key_type: str
    user_key: str
    username: str
    key_used: bool

    model_config = {"from_attributes": True}


class KeyList(BaseModel):
    keys: list[KeyRead]
