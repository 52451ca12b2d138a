"""Payload and response shapes shared by several endpoint groups."""

from __future__ import annotations

from pydantic import BaseModel


class StatusResponse(BaseModel):
    is_ok: bool = True


class TokenOnlyPayload(BaseModel):
    api_token: str


class NewValuePayload(BaseModel):
    """Single-column edits: the acting token plus the replacement value."""

    api_token: str
    new_value: str
