"""
Instance endpoints — public info plus admin-only settings & user listings.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from cleo.api.v1.deps import get_current_admin, get_db
from cleo.models.user import User
from cleo.repositories.instance import InstanceRepository
from cleo.repositories.users import UserRepository
from cleo.schemas.common import NewValuePayload, StatusResponse
from cleo.schemas.instance import InstanceInfoRead
from cleo.schemas.user import UserList, UserRead
from cleo.services.guard import acting_admin

router = APIRouter(prefix="/instance", tags=["instance"])
logger = logging.getLogger(__name__)


@router.get("/info", response_model=InstanceInfoRead)
async def instance_info(db: AsyncSession = Depends(get_db)) -> InstanceInfoRead:
    info = await InstanceRepository(db).get()
    return InstanceInfoRead(name=info.instance_name, hostname=info.hostname)


# ── User listings ───────────────────────────────────────────────────
@router.post("/admins", response_model=UserList)
async def list_admins(
    _admin: User = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
) -> UserList:
    users = await UserRepository(db).list_by_role(True)
    return UserList(users=[UserRead.model_validate(u) for u in users])


@router.post("/users", response_model=UserList)
async def list_users(
    _admin: User = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
) -> UserList:
    users = await UserRepository(db).list_by_role(False)
    return UserList(users=[UserRead.model_validate(u) for u in users])


# ── Settings edits ──────────────────────────────────────────────────
async def _edit(db: AsyncSession, body: NewValuePayload, setting: str) -> StatusResponse:
    admin = await acting_admin(db, body.api_token)
    updater = getattr(InstanceRepository(db), f"update_{setting}")
    await updater(body.new_value)
    await db.commit()
    logger.info("Instance %s changed by %s", setting, admin.username)
    return StatusResponse()


@router.post("/edit/name", response_model=StatusResponse)
async def edit_name(body: NewValuePayload, db: AsyncSession = Depends(get_db)) -> StatusResponse:
    return await _edit(db, body, "name")


@router.post("/edit/hostname", response_model=StatusResponse)
async def edit_hostname(body: NewValuePayload, db: AsyncSession = Depends(get_db)) -> StatusResponse:
    return await _edit(db, body, "hostname")


@router.post("/edit/smtp/server", response_model=StatusResponse)
async def edit_smtp_server(body: NewValuePayload, db: AsyncSession = Depends(get_db)) -> StatusResponse:
    return await _edit(db, body, "smtp_server")


@router.post("/edit/smtp/username", response_model=StatusResponse)
async def edit_smtp_username(body: NewValuePayload, db: AsyncSession = Depends(get_db)) -> StatusResponse:
    return await _edit(db, body, "smtp_username")


@router.post("/edit/smtp/pass", response_model=StatusResponse)
async def edit_smtp_pass(body: NewValuePayload, db: AsyncSession = Depends(get_db)) -> StatusResponse:
    return await _edit(db, body, "smtp_pass")
