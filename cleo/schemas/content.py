"""Pydantic schemas for posts, extra content fields and files."""

from __future__ import annotations

import enum

from pydantic import BaseModel, field_validator


class ContentType(str, enum.Enum):
    page = "page"
    post = "post"


# ── Posts ───────────────────────────────────────────────────────────
class PostCreate(BaseModel):
    api_token: str
    content_type: ContentType
    content_text: str


class PostUpdate(BaseModel):
    api_token: str
    content_id: str
    text: str


class PostRef(BaseModel):
    api_token: str
    content_id: str


class PostRead(BaseModel):
    content_id: str
    content_type: str
    user_id: str
    content_text: str

    model_config = {"from_attributes": True}


class PostList(BaseModel):
    posts: list[PostRead]


# ── Extra content fields ────────────────────────────────────────────
class FieldCreate(BaseModel):
    api_token: str
    content_id: str
    field_key: str
    field_value: str

    @field_validator("field_key")
    @classmethod
    def _key(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Field key must not be empty")
        return v


class FieldEdit(BaseModel):
    api_token: str
    content_id: str
    field_id: str
    new_value: str


class FieldRef(BaseModel):
    api_token: str
    content_id: str
    field_id: str


class FieldRead(BaseModel):
    field_id: str
    content_id: str
    field_key: str
    field_value: str

    model_config = {"from_attributes": True}


class FieldList(BaseModel):
    fields: list[FieldRead]


# ── Files ───────────────────────────────────────────────────────────
class FileDelete(BaseModel):
    api_token: str
    file_id: str


class FileRead(BaseModel):
    file_id: str
    user_id: str
    file_name: str
    file_url: str


class FileList(BaseModel):
    files: list[FileRead]
