"""
Todo service: ownership-checked CRUD over the todo store.

Every mutation loads the row first (locked where the backend supports it),
then compares its owner with the acting user before touching it. Each
mutation is committed before returning, so the caller never reports a write
that did not persist.
"""

from __future__ import annotations

import logging
import uuid
from typing import List

from core.exceptions import Forbidden, NotFound
from database.models import Todo
from todos.schemas import TodoPatch
from todos.store import TodoStore, clean_text

logger = logging.getLogger(__name__)


class TodoService:
    def __init__(self, store: TodoStore) -> None:
        self._store = store

    async def list(self, owner_id: uuid.UUID) -> List[Todo]:
        return await self._store.list_by_owner(owner_id)

    async def create(self, owner_id: uuid.UUID, text: str) -> Todo:
        todo = await self._store.insert(clean_text(text), owner_id)
        await self._store.commit()
        logger.info("Created todo %s for %s", todo.todo_id, owner_id)
        return todo

    async def _load_owned(self, actor_id: uuid.UUID, todo_id: uuid.UUID) -> Todo:
        todo = await self._store.find_by_id(todo_id, for_update=True)
        if todo is None:
            raise NotFound()
        if todo.owner_id != actor_id:
            logger.warning(
                "User %s denied access to todo %s owned by %s",
                actor_id, todo_id, todo.owner_id,
            )
            raise Forbidden()
        return todo

    async def update(
        self, actor_id: uuid.UUID, todo_id: uuid.UUID, patch: TodoPatch,
    ) -> Todo:
        await self._load_owned(actor_id, todo_id)
        todo = await self._store.update(todo_id, patch)
        await self._store.commit()
        logger.info("Updated todo %s", todo_id)
        return todo

    async def delete(self, actor_id: uuid.UUID, todo_id: uuid.UUID) -> None:
        await self._load_owned(actor_id, todo_id)
        await self._store.delete(todo_id)
        await self._store.commit()
        logger.info("Deleted todo %s", todo_id)
