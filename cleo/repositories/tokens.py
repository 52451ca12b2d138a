"""API token & email verification token repositories."""

from __future__ import annotations

from sqlalchemy import delete

from cleo.core.security import new_id, new_secret
from cleo.models.credentials import EmailToken, UserAPIToken
from cleo.repositories.base import BaseRepository


class ApiTokenRepository(BaseRepository[UserAPIToken]):
    model = UserAPIToken
    label = "API token"

    async def create(self, *, user_id: str, username: str) -> UserAPIToken:
        token = UserAPIToken(
            token_id=new_id(username),
            user_id=user_id,
            token=new_secret(user_id),
        )
        return await self._insert(token)

    async def get_by_secret(self, secret: str) -> UserAPIToken:
        return await self._fetch_one(UserAPIToken.token == secret)


class EmailTokenRepository(BaseRepository[EmailToken]):
    model = EmailToken
    label = "Email token"

    async def create(self, *, user_id: str) -> EmailToken:
        token = EmailToken(
            etoken_id=new_id(user_id),
            email_token=new_secret(f"{user_id}:"),
            user_id=user_id,
        )
        return await self._insert(token)

    async def get_by_secret(self, secret: str) -> EmailToken:
        return await self._fetch_one(EmailToken.email_token == secret)

    async def delete_for_user(self, user_id: str) -> int:
        """Drop every outstanding token of *user_id*; returns how many went."""
        result = await self.db.execute(delete(EmailToken).where(EmailToken.user_id == user_id))
        return result.rowcount
