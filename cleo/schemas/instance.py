"""Pydantic schemas for instance information."""

from __future__ import annotations

from pydantic import BaseModel


class InstanceInfoRead(BaseModel):
    name: str
    hostname: str
