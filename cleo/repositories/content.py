"""Post, extra content field and uploaded-file repositories.

Mutations accept the owner id and fold it into the WHERE clause, so the
ownership check and the write are one statement.
"""

from __future__ import annotations

from cleo.core.security import new_id
from cleo.models.content import ExtraContentField, UserFile, UserPost
from cleo.repositories.base import BaseRepository

CONTENT_TYPES = ("page", "post")


class PostRepository(BaseRepository[UserPost]):
    model = UserPost
    label = "Post"

    async def create(self, *, user_id: str, content_type: str, content_text: str) -> UserPost:
        # Two posts sharing a 16-char prefix in the same microsecond would collide.
        post = UserPost(
            content_id=new_id(content_text[:16]),
            user_id=user_id,
            content_type=content_type,
            content_text=content_text,
        )
        return await self._insert(post)

    async def update_text(self, content_id: str, text: str, *, owner_id: str) -> None:
        await self._update_column(
            content_id, "content_text", text, UserPost.user_id == owner_id
        )

    async def delete_owned(self, content_id: str, *, owner_id: str) -> None:
        await self.delete(content_id, UserPost.user_id == owner_id)

    async def list_by_owner(self, user_id: str) -> list[UserPost]:
        return await self._fetch_all(UserPost.user_id == user_id)


class ExtraFieldRepository(BaseRepository[ExtraContentField]):
    model = ExtraContentField
    label = "Extra content field"

    async def create(self, *, content_id: str, field_key: str, field_value: str) -> ExtraContentField:
        field = ExtraContentField(
            field_id=new_id(f"{content_id}{field_key}"),
            content_id=content_id,
            field_key=field_key,
            field_value=field_value,
        )
        return await self._insert(field)

    async def get_for_post(self, field_id: str, content_id: str) -> ExtraContentField:
        return await self._fetch_one(
            ExtraContentField.field_id == field_id,
            ExtraContentField.content_id == content_id,
        )

    async def update_key(self, field_id: str, key: str, *, content_id: str) -> None:
        await self._update_column(
            field_id, "field_key", key, ExtraContentField.content_id == content_id
        )

    async def update_value(self, field_id: str, value: str, *, content_id: str) -> None:
        await self._update_column(
            field_id, "field_value", value, ExtraContentField.content_id == content_id
        )

    async def delete_for_post(self, field_id: str, *, content_id: str) -> None:
        await self.delete(field_id, ExtraContentField.content_id == content_id)

    async def list_by_post(self, content_id: str) -> list[ExtraContentField]:
        return await self._fetch_all(ExtraContentField.content_id == content_id)


class FileRepository(BaseRepository[UserFile]):
    model = UserFile
    label = "File"

    async def create(self, *, user_id: str, file_path: str, hostname: str) -> UserFile:
        file_id = new_id(file_path)
        user_file = UserFile(
            file_id=file_id,
            user_id=user_id,
            file_path=file_path,
            file_url=f"{hostname.rstrip('/')}/files/serve/{file_id}",
        )
        return await self._insert(user_file)

    async def delete_owned(self, file_id: str, *, owner_id: str) -> None:
        await self.delete(file_id, UserFile.user_id == owner_id)

    async def list_by_owner(self, user_id: str) -> list[UserFile]:
        return await self._fetch_all(UserFile.user_id == user_id)
