"""
Todo store: persistence for ``Todo`` rows.

Performs no ownership checks; that is ``TodoService``'s job.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import Infrastructure, NotFound, ValidationError
from database.models import TODO_TEXT_MAX_LENGTH, Todo
from todos.schemas import TodoPatch

logger = logging.getLogger(__name__)


def clean_text(text: Optional[str]) -> str:
    """Trim ``text`` and enforce 1..100 characters."""
    cleaned = (text or "").strip()
    if not cleaned:
        raise ValidationError("Please add a text value")
    if len(cleaned) > TODO_TEXT_MAX_LENGTH:
        raise ValidationError(
            f"Text cannot be more than {TODO_TEXT_MAX_LENGTH} characters"
        )
    return cleaned


class TodoStore:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def insert(self, text: str, owner_id: uuid.UUID) -> Todo:
        now = datetime.now(timezone.utc)
        todo = Todo(
            todo_id=uuid.uuid4(),
            text=clean_text(text),
            completed=False,
            owner_id=owner_id,
            created_at=now,
            updated_at=now,
        )
        self._session.add(todo)
        await self._session.flush()
        return todo

    async def find_by_id(
        self, todo_id: uuid.UUID, *, for_update: bool = False,
    ) -> Optional[Todo]:
        stmt = select(Todo).where(Todo.todo_id == todo_id)
        if for_update:
            stmt = stmt.with_for_update()
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_by_owner(self, owner_id: uuid.UUID) -> List[Todo]:
        result = await self._session.execute(
            select(Todo)
            .where(Todo.owner_id == owner_id)
            .order_by(Todo.created_at.asc())
        )
        return list(result.scalars().all())

    async def update(self, todo_id: uuid.UUID, patch: TodoPatch) -> Todo:
        """Apply only the fields present on ``patch``."""
        todo = await self.find_by_id(todo_id)
        if todo is None:
            raise NotFound()
        if patch.is_empty():
            return todo

        if patch.text is not None:
            todo.text = clean_text(patch.text)
        if patch.completed is not None:
            todo.completed = patch.completed
        todo.updated_at = datetime.now(timezone.utc)
        await self._session.flush()
        return todo

    async def delete(self, todo_id: uuid.UUID) -> None:
        await self._session.execute(delete(Todo).where(Todo.todo_id == todo_id))
        await self._session.flush()

    async def commit(self) -> None:
        """Make pending changes durable before the response is built."""
        try:
            await self._session.commit()
        except SQLAlchemyError as exc:
            logger.exception("Commit failed while saving todos")
            raise Infrastructure() from exc
