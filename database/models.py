"""
SQLAlchemy ORM models for users and their todos.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    String,
    Uuid,
)
from sqlalchemy.orm import DeclarativeBase


TODO_TEXT_MAX_LENGTH = 100


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class User(Base):
    __tablename__ = "users"

    user_id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(128), nullable=False)
    email = Column(String(255), unique=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow)


class Todo(Base):
    __tablename__ = "todos"
    __table_args__ = (
        Index("ix_todos_owner_created", "owner_id", "created_at"),
    )

    todo_id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    text = Column(String(TODO_TEXT_MAX_LENGTH), nullable=False)
    completed = Column(Boolean, nullable=False, default=False)
    owner_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("users.user_id", ondelete="CASCADE"),
        nullable=False,
    )
    created_at = Column(DateTime(timezone=True), default=_utcnow)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)
