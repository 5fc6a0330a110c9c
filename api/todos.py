"""
Todo API routes. Every endpoint requires a Bearer token.

Route prefix: /api/todos
"""

from __future__ import annotations

import uuid
from typing import List

from fastapi import APIRouter, Depends, status

from api.dependencies import get_todo_service
from auth.dependencies import Identity, get_current_identity
from core.exceptions import NotFound
from todos.schemas import TodoCreate, TodoDeleted, TodoOut, TodoPatch
from todos.service import TodoService

router = APIRouter(tags=["todos"])


def _parse_todo_id(todo_id: str) -> uuid.UUID:
    try:
        return uuid.UUID(todo_id)
    except ValueError as exc:
        raise NotFound() from exc


@router.get("", response_model=List[TodoOut])
async def list_todos(
    identity: Identity = Depends(get_current_identity),
    service: TodoService = Depends(get_todo_service),
) -> List[TodoOut]:
    todos = await service.list(identity.user_id)
    return [TodoOut.model_validate(t) for t in todos]


@router.post("", response_model=TodoOut, status_code=status.HTTP_201_CREATED)
async def create_todo(
    req: TodoCreate,
    identity: Identity = Depends(get_current_identity),
    service: TodoService = Depends(get_todo_service),
) -> TodoOut:
    todo = await service.create(identity.user_id, req.text)
    return TodoOut.model_validate(todo)


@router.put("/{todo_id}", response_model=TodoOut)
async def update_todo(
    todo_id: str,
    patch: TodoPatch,
    identity: Identity = Depends(get_current_identity),
    service: TodoService = Depends(get_todo_service),
) -> TodoOut:
    todo = await service.update(identity.user_id, _parse_todo_id(todo_id), patch)
    return TodoOut.model_validate(todo)


@router.delete("/{todo_id}", response_model=TodoDeleted)
async def delete_todo(
    todo_id: str,
    identity: Identity = Depends(get_current_identity),
    service: TodoService = Depends(get_todo_service),
) -> TodoDeleted:
    tid = _parse_todo_id(todo_id)
    await service.delete(identity.user_id, tid)
    return TodoDeleted(id=tid)
