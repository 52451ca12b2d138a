"""
Account endpoints — registration, profile edits, deletion.

Registration needs a signup key; every edit needs the caller's API token;
deletion re-authenticates with username and password.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from cleo.api.v1.deps import get_db
from cleo.core.exceptions import InvalidInputError
from cleo.repositories.users import UserRepository
from cleo.schemas.common import NewValuePayload, StatusResponse
from cleo.schemas.user import UserCreate, UserCreationResponse, UserCredentials, UserRead
from cleo.services.accounts import change_email, register_user
from cleo.services.guard import acting_user
from cleo.services.mailer import Mailer, get_mailer
from cleo.services.tokens import authenticate

router = APIRouter(prefix="/user", tags=["users"])
logger = logging.getLogger(__name__)


@router.post("/create", response_model=UserCreationResponse)
async def create_user(
    body: UserCreate,
    db: AsyncSession = Depends(get_db),
    mailer: Mailer = Depends(get_mailer),
) -> UserCreationResponse:
    """Register with a signup key; a verification mail goes out before commit."""
    user, key_updated = await register_user(
        db,
        mailer,
        username=body.username,
        display_name=body.display_name,
        password=body.password,
        email_addr=body.email_addr,
        pfp_url=body.pfp_url,
        user_key=body.user_key,
    )
    await db.commit()
    return UserCreationResponse(
        **UserRead.model_validate(user).model_dump(),
        key_status_updated=key_updated,
    )


# ── Profile edits ───────────────────────────────────────────────────
@router.post("/update/username", response_model=StatusResponse)
async def update_username(
    body: NewValuePayload,
    db: AsyncSession = Depends(get_db),
) -> StatusResponse:
    user = await acting_user(db, body.api_token)
    users = UserRepository(db)
    new_name = body.new_value.strip()
    if not new_name:
        raise InvalidInputError("Username must not be empty.")
    if await users.exists_by_username(new_name):
        raise InvalidInputError(f'The username "{new_name}" is already taken.')
    await users.update_username(user.user_id, new_name)
    await db.commit()
    logger.info("User %s renamed to %s", user.username, new_name)
    return StatusResponse()


@router.post("/update/name", response_model=StatusResponse)
async def update_display_name(
    body: NewValuePayload,
    db: AsyncSession = Depends(get_db),
) -> StatusResponse:
    user = await acting_user(db, body.api_token)
    await UserRepository(db).update_display_name(user.user_id, body.new_value)
    await db.commit()
    return StatusResponse()


@router.post("/update/email", response_model=StatusResponse)
async def update_email(
    body: NewValuePayload,
    db: AsyncSession = Depends(get_db),
    mailer: Mailer = Depends(get_mailer),
) -> StatusResponse:
    """Verify the new address by mail, then switch to it."""
    user = await acting_user(db, body.api_token)
    if "@" not in body.new_value:
        raise InvalidInputError("Invalid email address.")
    await change_email(db, mailer, user, body.new_value.strip())
    await db.commit()
    return StatusResponse()


@router.post("/update/picture", response_model=StatusResponse)
async def update_picture(
    body: NewValuePayload,
    db: AsyncSession = Depends(get_db),
) -> StatusResponse:
    user = await acting_user(db, body.api_token)
    await UserRepository(db).update_pfp(user.user_id, body.new_value)
    await db.commit()
    return StatusResponse()


@router.post("/update/password", response_model=StatusResponse)
async def update_password(
    body: NewValuePayload,
    db: AsyncSession = Depends(get_db),
) -> StatusResponse:
    user = await acting_user(db, body.api_token)
    if not body.new_value:
        raise InvalidInputError("Password must not be empty.")
    await UserRepository(db).update_password(user.user_id, body.new_value)
    await db.commit()
    logger.info("Password changed for %s", user.username)
    return StatusResponse()


@router.post("/delete", response_model=StatusResponse)
async def delete_user(
    body: UserCredentials,
    db: AsyncSession = Depends(get_db),
) -> StatusResponse:
    """Delete the account. Its posts, files and tokens stay behind."""
    user = await authenticate(db, body.username, body.password)
    await UserRepository(db).delete(user.user_id)
    await db.commit()
    logger.info("User %s deleted", user.username)
    return StatusResponse()
