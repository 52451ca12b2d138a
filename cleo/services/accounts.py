"""
Account lifecycle — signup-key registration and email address changes.

Both send a verification mail before the caller commits; a failed send
raises and the whole unit of work is rolled back.
"""

from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from cleo.core.config import settings
from cleo.core.exceptions import DownstreamError, InvalidInputError
from cleo.models.user import User
from cleo.repositories.instance import InstanceRepository
from cleo.repositories.keys import SignupKeyRepository, kind_for_secret
from cleo.repositories.tokens import EmailTokenRepository
from cleo.repositories.users import UserRepository
from cleo.services.mailer import Mailer, send_verification

logger = logging.getLogger(__name__)


async def _mail_verification(db: AsyncSession, mailer: Mailer, user_id: str, to_addr: str) -> None:
    email_token = await EmailTokenRepository(db).create(user_id=user_id)
    info = await InstanceRepository(db).get()
    await send_verification(mailer, info, to_addr, email_token.email_token)


async def register_user(
    db: AsyncSession,
    mailer: Mailer,
    *,
    username: str,
    display_name: str,
    password: str,
    email_addr: str,
    pfp_url: str,
    user_key: str,
) -> tuple[User, bool]:
    """Create an account from a signup key.

    Returns the new user and whether the key went from unused to used;
    with single-use enforcement off, a reused key reports False.
    """
    kind = kind_for_secret(user_key)
    keys = SignupKeyRepository(db)
    key = await keys.get_by_secret(user_key)
    if key.username != username:
        raise InvalidInputError("This user key was issued for a different username.")
    if settings.ENFORCE_SINGLE_USE_KEYS and key.key_used:
        raise InvalidInputError("This user key has already been used.")

    users = UserRepository(db)
    if await users.exists_by_username(username):
        raise InvalidInputError(f'The username "{username}" is already taken.')

    user = await users.create(
        username=username,
        display_name=display_name,
        password=password,
        email_addr=email_addr,
        pfp_url=pfp_url,
        is_admin=kind == "admin",
    )
    key_updated = await keys.mark_used(key.key_id)
    if settings.ENFORCE_SINGLE_USE_KEYS and not key_updated:
        raise InvalidInputError("This user key has already been used.")

    try:
        await _mail_verification(db, mailer, user.user_id, email_addr)
    except DownstreamError as exc:
        raise DownstreamError("Account creation failure.") from exc

    logger.info("User %s registered (%s key)", username, kind)
    return user, key_updated


async def change_email(db: AsyncSession, mailer: Mailer, user: User, email_addr: str) -> None:
    """Point the account at a new address and mark it unverified.

    Links mailed to the previous address stop working.
    """
    await EmailTokenRepository(db).delete_for_user(user.user_id)
    await _mail_verification(db, mailer, user.user_id, email_addr)
    users = UserRepository(db)
    await users.update_email(user.user_id, email_addr)
    await users.set_verified(user.user_id, False)
    logger.info("Email address changed for %s", user.username)
