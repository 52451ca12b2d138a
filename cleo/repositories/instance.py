"""Instance information repository (singleton row)."""

from __future__ import annotations

from sqlalchemy import select

from cleo.core.exceptions import NotFoundError
from cleo.core.security import hash_string
from cleo.models.instance import InstanceInformation
from cleo.repositories.base import BaseRepository


class InstanceRepository(BaseRepository[InstanceInformation]):
    model = InstanceInformation
    label = "Instance information"

    async def create(
        self,
        *,
        hostname: str,
        instance_name: str,
        smtp_server: str,
        smtp_username: str,
        smtp_pass: str,
        file_dir: str,
    ) -> InstanceInformation:
        info = InstanceInformation(
            instance_id=hash_string(f"{hostname}{instance_name}"),
            hostname=hostname,
            instance_name=instance_name,
            smtp_server=smtp_server,
            smtp_username=smtp_username,
            smtp_pass=smtp_pass,
            file_dir=file_dir,
        )
        return await self._insert(info)

    async def get(self) -> InstanceInformation:
        """The first row wins; the table is expected to hold exactly one."""
        result = await self.db.execute(select(InstanceInformation).limit(1))
        info = result.scalar_one_or_none()
        if info is None:
            raise NotFoundError("Instance information has not been set up.")
        return info

    async def exists(self) -> bool:
        result = await self.db.execute(select(InstanceInformation.instance_id).limit(1))
        return result.first() is not None

    async def _update_singleton(self, column: str, value: str) -> None:
        info = await self.get()
        await self._update_column(info.instance_id, column, value)

    async def update_name(self, value: str) -> None:
        await self._update_singleton("instance_name", value)

    async def update_hostname(self, value: str) -> None:
        await self._update_singleton("hostname", value)

    async def update_smtp_server(self, value: str) -> None:
        await self._update_singleton("smtp_server", value)

    async def update_smtp_username(self, value: str) -> None:
        await self._update_singleton("smtp_username", value)

    async def update_smtp_pass(self, value: str) -> None:
        await self._update_singleton("smtp_pass", value)
