"""
Instance information model — singleton table for admin-configurable settings.

Only one row should ever exist.  It is seeded on first startup and read
back as "the first row"; admins update it one column at a time.
"""

from __future__ import annotations

from sqlalchemy import Column, String

from cleo.db.base import Base


class InstanceInformation(Base):
    __tablename__ = "instance_info"

    instance_id: str = Column(String(64), primary_key=True)  # type: ignore[assignment]
    hostname: str = Column(String(500), nullable=False)  # type: ignore[assignment]
    instance_name: str = Column(String(200), nullable=False)  # type: ignore[assignment]
    smtp_server: str = Column(String(500), nullable=False)  # type: ignore[assignment]
    smtp_username: str = Column(String(320), nullable=False)  # type: ignore[assignment]
    smtp_pass: str = Column(String(500), nullable=False)  # type: ignore[assignment]
    file_dir: str = Column(String(1024), nullable=False)  # type: ignore[assignment]
