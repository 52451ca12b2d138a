"""
Signup key management (admin only).

Mounted under both ``/keys`` and ``/user/keys``.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from cleo.api.v1.deps import get_current_admin, get_db
from cleo.models.user import User
from cleo.repositories.keys import SignupKeyRepository
from cleo.schemas.common import StatusResponse
from cleo.schemas.keys import KeyCreate, KeyDelete, KeyList, KeyRead
from cleo.services.guard import acting_admin

router = APIRouter(tags=["keys"])
logger = logging.getLogger(__name__)


@router.post("/create", response_model=KeyRead)
async def create_key(
    body: KeyCreate,
    db: AsyncSession = Depends(get_db),
) -> KeyRead:
    """Issue a key reserved for ``username``; its length encodes its kind."""
    admin = await acting_admin(db, body.api_token)
    key = await SignupKeyRepository(db).create(
        issuer_id=admin.user_id,
        key_type=body.key_type,
        username=body.username,
    )
    await db.commit()
    logger.info("%s issued a %s key for %s", admin.username, key.key_type, key.username)
    return KeyRead.model_validate(key)


@router.post("/delete", response_model=StatusResponse)
async def delete_key(
    body: KeyDelete,
    db: AsyncSession = Depends(get_db),
) -> StatusResponse:
    admin = await acting_admin(db, body.api_token)
    await SignupKeyRepository(db).delete(body.key_id)
    await db.commit()
    logger.info("%s deleted key %s", admin.username, body.key_id)
    return StatusResponse()


@router.post("/all", response_model=KeyList)
async def list_keys(
    admin: User = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
) -> KeyList:
    """Keys issued by the calling admin."""
    keys = await SignupKeyRepository(db).list_by_owner(admin.user_id)
    return KeyList(keys=[KeyRead.model_validate(k) for k in keys])
