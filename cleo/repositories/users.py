"""User repository — accounts and their single-column updates."""

from __future__ import annotations

from sqlalchemy import select

from cleo.core.security import get_password_hash, new_id
from cleo.models.user import User
from cleo.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    model = User
    label = "User"

    async def create(
        self,
        *,
        username: str,
        display_name: str,
        password: str,
        email_addr: str,
        pfp_url: str,
        is_admin: bool,
    ) -> User:
        """Hash the password and insert a fresh, unverified account."""
        user = User(
            user_id=new_id(username),
            username=username,
            display_name=display_name,
            hashed_password=get_password_hash(password),
            email_addr=email_addr,
            pfp_url=pfp_url,
            is_verified=False,
            is_admin=is_admin,
        )
        return await self._insert(user)

    async def get_by_username(self, username: str) -> User:
        return await self._fetch_one(User.username == username)

    async def exists_by_username(self, username: str) -> bool:
        result = await self.db.execute(
            select(User.user_id).where(User.username == username)
        )
        return result.first() is not None

    async def list_by_role(self, is_admin: bool) -> list[User]:
        return await self._fetch_all(User.is_admin.is_(is_admin))

    async def update_username(self, user_id: str, username: str) -> None:
        await self._update_column(user_id, "username", username)

    async def update_display_name(self, user_id: str, display_name: str) -> None:
        await self._update_column(user_id, "display_name", display_name)

    async def update_email(self, user_id: str, email_addr: str) -> None:
        await self._update_column(user_id, "email_addr", email_addr)

    async def update_pfp(self, user_id: str, pfp_url: str) -> None:
        await self._update_column(user_id, "pfp_url", pfp_url)

    async def update_password(self, user_id: str, password: str) -> None:
        await self._update_column(user_id, "hashed_password", get_password_hash(password))

    async def set_verified(self, user_id: str, verified: bool = True) -> None:
        await self._update_column(user_id, "is_verified", verified)
