"""
Credential models — bearer tokens, signup keys and email verification tokens.

None of these carry foreign keys: deleting a user leaves its rows behind.
"""

from __future__ import annotations

from sqlalchemy import Boolean, Column, String

from cleo.db.base import Base


class UserAPIToken(Base):
    __tablename__ = "user_api_tokens"

    token_id: str = Column(String(64), primary_key=True)  # type: ignore[assignment]
    user_id: str = Column(String(64), nullable=False, index=True)  # type: ignore[assignment]
    token: str = Column(String(64), unique=True, nullable=False, index=True)  # type: ignore[assignment]


class UserKey(Base):
    __tablename__ = "user_keys"

    key_id: str = Column(String(64), primary_key=True)  # type: ignore[assignment]
    user_id: str = Column(String(64), nullable=False, index=True)  # type: ignore[assignment]  # issuing admin
    user_key: str = Column(String(16), nullable=False, index=True)  # type: ignore[assignment]
    key_type: str = Column(String(10), nullable=False)  # type: ignore[assignment]  # admin | normal
    key_used: bool = Column(Boolean, nullable=False, default=False, server_default="false")  # type: ignore[assignment]
    username: str = Column(String(200), nullable=False)  # type: ignore[assignment]


class EmailToken(Base):
    __tablename__ = "email_tokens"

    etoken_id: str = Column(String(64), primary_key=True)  # type: ignore[assignment]
    email_token: str = Column(String(64), unique=True, nullable=False, index=True)  # type: ignore[assignment]
    user_id: str = Column(String(64), nullable=False)  # type: ignore[assignment]
