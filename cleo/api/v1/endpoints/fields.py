"""
Extra content field (ECF) endpoints.

A field belongs to a post; the caller must own that post.  A field id
paired with some other post's id is reported as not found.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from cleo.api.v1.deps import get_db
from cleo.models.content import UserPost
from cleo.repositories.content import ExtraFieldRepository, PostRepository
from cleo.schemas.common import StatusResponse
from cleo.schemas.content import FieldCreate, FieldEdit, FieldList, FieldRead, FieldRef, PostRef
from cleo.services.guard import acting_user, require_owner

router = APIRouter(prefix="/ecf", tags=["extra content fields"])


async def _owned_post(db: AsyncSession, api_token: str, content_id: str) -> UserPost:
    user = await acting_user(db, api_token)
    post = await PostRepository(db).get_by_id(content_id)
    require_owner(user, post.user_id, "post")
    return post


@router.post("/create", response_model=FieldRead)
async def create_field(
    body: FieldCreate,
    db: AsyncSession = Depends(get_db),
) -> FieldRead:
    post = await _owned_post(db, body.api_token, body.content_id)
    field = await ExtraFieldRepository(db).create(
        content_id=post.content_id,
        field_key=body.field_key,
        field_value=body.field_value,
    )
    await db.commit()
    return FieldRead.model_validate(field)


@router.post("/edit/key", response_model=StatusResponse)
async def edit_field_key(
    body: FieldEdit,
    db: AsyncSession = Depends(get_db),
) -> StatusResponse:
    fields = ExtraFieldRepository(db)
    await fields.get_for_post(body.field_id, body.content_id)
    post = await _owned_post(db, body.api_token, body.content_id)
    await fields.update_key(body.field_id, body.new_value, content_id=post.content_id)
    await db.commit()
    return StatusResponse()


@router.post("/edit/value", response_model=StatusResponse)
async def edit_field_value(
    body: FieldEdit,
    db: AsyncSession = Depends(get_db),
) -> StatusResponse:
    fields = ExtraFieldRepository(db)
    await fields.get_for_post(body.field_id, body.content_id)
    post = await _owned_post(db, body.api_token, body.content_id)
    await fields.update_value(body.field_id, body.new_value, content_id=post.content_id)
    await db.commit()
    return StatusResponse()


@router.post("/delete", response_model=StatusResponse)
async def delete_field(
    body: FieldRef,
    db: AsyncSession = Depends(get_db),
) -> StatusResponse:
    fields = ExtraFieldRepository(db)
    await fields.get_for_post(body.field_id, body.content_id)
    post = await _owned_post(db, body.api_token, body.content_id)
    await fields.delete_for_post(body.field_id, content_id=post.content_id)
    await db.commit()
    return StatusResponse()


@router.post("/all", response_model=FieldList)
async def list_fields(
    body: PostRef,
    db: AsyncSession = Depends(get_db),
) -> FieldList:
    post = await _owned_post(db, body.api_token, body.content_id)
    fields = await ExtraFieldRepository(db).list_by_post(post.content_id)
    return FieldList(fields=[FieldRead.model_validate(f) for f in fields])
