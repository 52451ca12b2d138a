"""Signup key repository.

A key's kind is encoded in the length of its secret: 16 characters for an
admin key, 10 for a normal one.
"""

from __future__ import annotations

from sqlalchemy import update

from cleo.core.exceptions import InvalidInputError
from cleo.core.security import generate_key, new_id
from cleo.models.credentials import UserKey
from cleo.repositories.base import BaseRepository

KEY_LENGTHS = {"admin": 16, "normal": 10}


def kind_for_secret(secret: str) -> str:
    """Return ``admin`` or ``normal`` for a key secret, by length."""
    for kind, length in KEY_LENGTHS.items():
        if len(secret) == length:
            return kind
    raise InvalidInputError("The provided user key has an invalid length.")


class SignupKeyRepository(BaseRepository[UserKey]):
    model = UserKey
    label = "User key"

    async def create(self, *, issuer_id: str, key_type: str, username: str) -> UserKey:
        if key_type not in KEY_LENGTHS:
            raise InvalidInputError(f'"{key_type}" is not a valid user key type.')
        secret = generate_key(KEY_LENGTHS[key_type])
        key = UserKey(
            key_id=new_id(secret),
            user_id=issuer_id,
            user_key=secret,
            key_type=key_type,
            key_used=False,
            username=username,
        )
        return await self._insert(key)

    async def get_by_secret(self, secret: str) -> UserKey:
        return await self._fetch_one(UserKey.user_key == secret)

    async def mark_used(self, key_id: str) -> bool:
        """Flag the key as used. False when it already was."""
        result = await self.db.execute(
            update(UserKey)
            .where(UserKey.key_id == key_id, UserKey.key_used.is_(False))
            .values(key_used=True)
        )
        return result.rowcount > 0

    async def list_by_owner(self, user_id: str) -> list[UserKey]:
        return await self._fetch_all(UserKey.user_id == user_id)
