"""
Post & page endpoints.

Updates and deletes check ownership first, then run a statement that
also matches on the owner, all in one transaction.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from cleo.api.v1.deps import get_current_user, get_db
from cleo.models.user import User
from cleo.repositories.content import PostRepository
from cleo.schemas.common import StatusResponse
from cleo.schemas.content import PostCreate, PostList, PostRead, PostRef, PostUpdate
from cleo.services.guard import acting_user, require_owner

router = APIRouter(prefix="/posts", tags=["posts"])
logger = logging.getLogger(__name__)


@router.post("/create", response_model=PostRead)
async def create_post(
    body: PostCreate,
    db: AsyncSession = Depends(get_db),
) -> PostRead:
    user = await acting_user(db, body.api_token)
    post = await PostRepository(db).create(
        user_id=user.user_id,
        content_type=body.content_type.value,
        content_text=body.content_text,
    )
    await db.commit()
    logger.info("%s created %s %s", user.username, post.content_type, post.content_id)
    return PostRead.model_validate(post)


@router.post("/update", response_model=StatusResponse)
async def update_post(
    body: PostUpdate,
    db: AsyncSession = Depends(get_db),
) -> StatusResponse:
    user = await acting_user(db, body.api_token)
    posts = PostRepository(db)
    post = await posts.get_by_id(body.content_id)
    require_owner(user, post.user_id, "post")
    await posts.update_text(post.content_id, body.text, owner_id=user.user_id)
    await db.commit()
    return StatusResponse()


@router.post("/delete", response_model=StatusResponse)
async def delete_post(
    body: PostRef,
    db: AsyncSession = Depends(get_db),
) -> StatusResponse:
    """Delete a post. Its extra content fields are not removed."""
    user = await acting_user(db, body.api_token)
    posts = PostRepository(db)
    post = await posts.get_by_id(body.content_id)
    require_owner(user, post.user_id, "post")
    await posts.delete_owned(post.content_id, owner_id=user.user_id)
    await db.commit()
    logger.info("%s deleted post %s", user.username, post.content_id)
    return StatusResponse()


@router.post("/all", response_model=PostList)
async def list_posts(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> PostList:
    posts = await PostRepository(db).list_by_owner(user.user_id)
    return PostList(posts=[PostRead.model_validate(p) for p in posts])
