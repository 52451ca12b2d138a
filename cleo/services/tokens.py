"""
Credential & token store — password re-authentication and bearer tokens.
"""

from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from cleo.core.exceptions import InvalidCredentialsError, NotFoundError, NotOwnerError
from cleo.core.security import verify_password
from cleo.models.credentials import UserAPIToken
from cleo.models.user import User
from cleo.repositories.tokens import ApiTokenRepository
from cleo.repositories.users import UserRepository

logger = logging.getLogger(__name__)

_BAD_LOGIN = "Invalid username or password."


async def authenticate(db: AsyncSession, username: str, password: str) -> User:
    """Look a user up by name and check the password.

    An unknown username and a wrong password raise the same error.
    """
    try:
        user = await UserRepository(db).get_by_username(username)
    except NotFoundError:
        raise InvalidCredentialsError(_BAD_LOGIN) from None
    if not verify_password(password, user.hashed_password):
        logger.warning("Failed password check for %s", username)
        raise InvalidCredentialsError(_BAD_LOGIN)
    return user


async def issue_token(db: AsyncSession, username: str, password: str) -> UserAPIToken:
    user = await authenticate(db, username, password)
    token = await ApiTokenRepository(db).create(user_id=user.user_id, username=user.username)
    logger.info("API token issued for %s", user.username)
    return token


async def resolve_token(db: AsyncSession, secret: str) -> User:
    """Bearer secret → the user it belongs to."""
    token = await ApiTokenRepository(db).get_by_secret(secret)
    return await UserRepository(db).get_by_id(token.user_id)


async def revoke_token(db: AsyncSession, secret: str, username: str, password: str) -> None:
    user = await authenticate(db, username, password)
    tokens = ApiTokenRepository(db)
    token = await tokens.get_by_secret(secret)
    if token.user_id != user.user_id:
        logger.warning("%s tried to revoke a token they do not own", username)
        raise NotOwnerError("This API token does not belong to you.")
    await tokens.delete(token.token_id)
    logger.info("API token revoked for %s", username)
