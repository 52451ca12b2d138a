"""
FastAPI dependencies — database session and token-resolving guards.

The guards read ``api_token`` from the JSON body, so they are only used
by endpoints whose body is nothing but the token.  Endpoints that take
more fields resolve the token from their own payload.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from cleo.db.session import async_session_factory
from cleo.models.user import User
from cleo.schemas.common import TokenOnlyPayload
from cleo.services.guard import acting_admin, acting_user


# ── Database session ────────────────────────────────────────────────
async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with async_session_factory() as session:
        try:
            yield session
        finally:
            await session.close()


# ── Auth dependencies ───────────────────────────────────────────────
async def get_current_user(
    payload: TokenOnlyPayload,
    db: AsyncSession = Depends(get_db),
) -> User:
    """Resolve the bearer token in the body to its user."""
    return await acting_user(db, payload.api_token)


async def get_current_admin(
    payload: TokenOnlyPayload,
    db: AsyncSession = Depends(get_db),
) -> User:
    """Like :func:`get_current_user`, but only admins pass."""
    return await acting_admin(db, payload.api_token)
