"""
User model — accounts, credentials & the admin role flag.
"""

from __future__ import annotations

from sqlalchemy import Boolean, Column, String

from cleo.db.base import Base


class User(Base):
    __tablename__ = "cleo_users"

    user_id: str = Column(String(64), primary_key=True)  # type: ignore[assignment]
    username: str = Column(String(200), unique=True, nullable=False, index=True)  # type: ignore[assignment]
    display_name: str = Column(String(200), nullable=False)  # type: ignore[assignment]
    hashed_password: str = Column("pwd", String(128), nullable=False)  # type: ignore[assignment]
    email_addr: str = Column(String(320), nullable=False)  # type: ignore[assignment]
    pfp_url: str = Column(String(2048), nullable=False, default="")  # type: ignore[assignment]
    is_verified: bool = Column(Boolean, nullable=False, default=False, server_default="false")  # type: ignore[assignment]
    is_admin: bool = Column(Boolean, nullable=False, default=False, server_default="false")  # type: ignore[assignment]
