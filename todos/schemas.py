"""
Pydantic schemas for todo request and response bodies.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class TodoCreate(BaseModel):
    # Any ``owner`` sent by the client is dropped; the owner is the caller.
    model_config = ConfigDict(extra="ignore")

    text: str


class TodoPatch(BaseModel):
    """Allow-listed fields a client may change on an existing todo."""

    model_config = ConfigDict(extra="ignore")

    text: Optional[str] = None
    completed: Optional[bool] = None

    def is_empty(self) -> bool:
        return self.text is None and self.completed is None


class TodoOut(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: uuid.UUID = Field(validation_alias="todo_id")
    text: str
    completed: bool
    owner: uuid.UUID = Field(validation_alias="owner_id")
    created_at: datetime
    updated_at: datetime


class TodoDeleted(BaseModel):
    id: uuid.UUID
