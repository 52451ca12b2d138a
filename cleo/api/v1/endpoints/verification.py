"""Email verification link target."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from cleo.api.v1.deps import get_db
from cleo.repositories.tokens import EmailTokenRepository
from cleo.repositories.users import UserRepository
from cleo.schemas.common import StatusResponse

router = APIRouter(prefix="/email", tags=["email"])
logger = logging.getLogger(__name__)


@router.get("/{token}", response_model=StatusResponse)
async def verify_email(
    token: str,
    db: AsyncSession = Depends(get_db),
) -> StatusResponse:
    """Mark the owner verified and burn the token; a second visit is not found."""
    tokens = EmailTokenRepository(db)
    email_token = await tokens.get_by_secret(token)
    await UserRepository(db).set_verified(email_token.user_id)
    await tokens.delete(email_token.etoken_id)
    await db.commit()
    logger.info("Email verified for user %s", email_token.user_id)
    return StatusResponse()
