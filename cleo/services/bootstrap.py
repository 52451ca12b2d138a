"""First-start seeding of the instance row and the initial administrator."""

from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from cleo.core.config import Settings
from cleo.repositories.instance import InstanceRepository
from cleo.repositories.users import UserRepository

logger = logging.getLogger(__name__)


async def bootstrap_instance(db: AsyncSession, config: Settings) -> None:
    """Seed missing state from *config*; safe to run on every start."""
    instance = InstanceRepository(db)
    if not await instance.exists():
        await instance.create(
            hostname=config.HOSTNAME,
            instance_name=config.INSTANCE_NAME,
            smtp_server=config.SMTP_SERVER,
            smtp_username=config.SMTP_USERNAME,
            smtp_pass=config.SMTP_PASS,
            file_dir=config.FILE_DIR,
        )
        logger.info("Instance information seeded for %s", config.INSTANCE_NAME)

    users = UserRepository(db)
    if not await users.exists_by_username(config.ADMIN_USERNAME):
        await users.create(
            username=config.ADMIN_USERNAME,
            display_name=config.ADMIN_DISPLAY_NAME,
            password=config.ADMIN_PASSWORD,
            email_addr=config.ADMIN_EMAIL,
            pfp_url="",
            is_admin=True,
        )
        logger.info("Default admin created: %s (password: <redacted>)", config.ADMIN_USERNAME)

    await db.commit()
