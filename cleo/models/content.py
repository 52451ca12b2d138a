"""
Content models — posts & pages, their extra content fields, uploaded files.
"""

from __future__ import annotations

from sqlalchemy import Column, String, Text

from cleo.db.base import Base


class UserPost(Base):
    __tablename__ = "user_posts"

    content_id: str = Column(String(64), primary_key=True)  # type: ignore[assignment]
    user_id: str = Column(String(64), nullable=False, index=True)  # type: ignore[assignment]
    content_type: str = Column(String(10), nullable=False)  # type: ignore[assignment]  # page | post
    content_text: str = Column(Text, nullable=False)  # type: ignore[assignment]


class ExtraContentField(Base):
    __tablename__ = "extra_content_fields"

    field_id: str = Column(String(64), primary_key=True)  # type: ignore[assignment]
    content_id: str = Column(String(64), nullable=False, index=True)  # type: ignore[assignment]
    field_key: str = Column(String(200), nullable=False)  # type: ignore[assignment]
    field_value: str = Column(Text, nullable=False)  # type: ignore[assignment]


class UserFile(Base):
    __tablename__ = "user_files"

    file_id: str = Column(String(64), primary_key=True)  # type: ignore[assignment]
    user_id: str = Column(String(64), nullable=False, index=True)  # type: ignore[assignment]
    file_path: str = Column(String(1024), nullable=False)  # type: ignore[assignment]
    file_url: str = Column(String(2048), nullable=False)  # type: ignore[assignment]
