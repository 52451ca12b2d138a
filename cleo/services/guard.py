"""
Authorization guard — every mutation goes through one of these checks.

The checks only read; callers perform the mutation afterwards on the
same session, so check and act commit together.
"""

from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from cleo.core.exceptions import NotAdminError, NotOwnerError
from cleo.models.user import User
from cleo.services.tokens import resolve_token

logger = logging.getLogger(__name__)


def require_owner(user: User, owner_id: str, resource: str = "resource") -> None:
    if user.user_id != owner_id:
        logger.warning("Ownership check failed: %s on %s", user.username, resource)
        raise NotOwnerError(f"You do not own this {resource}.")


def require_admin(user: User) -> None:
    if not user.is_admin:
        logger.warning("Admin check failed for %s", user.username)
        raise NotAdminError("Administrator privileges are required.")


async def acting_user(db: AsyncSession, api_token: str) -> User:
    return await resolve_token(db, api_token)


async def acting_admin(db: AsyncSession, api_token: str) -> User:
    user = await resolve_token(db, api_token)
    require_admin(user)
    return user
