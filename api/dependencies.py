"""
FastAPI dependencies (shared across routes).

Builds the per-request stores and services on top of the request's DB
session and the application-wide ``Settings`` / ``TokenService``.
"""

from __future__ import annotations

from typing import AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from auth.authenticator import Authenticator
from auth.credentials import CredentialStore
from auth.dependencies import get_token_service
from auth.tokens import TokenService
from config.settings import Settings
from database.session import get_db_session
from todos.service import TodoService
from todos.store import TodoStore


async def db_session(session: AsyncSession = Depends(get_db_session)) -> AsyncGenerator[AsyncSession, None]:
    """Re-export so routes import from a single place."""
    yield session


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_authenticator(
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(get_settings),
    tokens: TokenService = Depends(get_token_service),
) -> Authenticator:
    credentials = CredentialStore(session, bcrypt_rounds=settings.bcrypt_rounds)
    return Authenticator(credentials, tokens)


def get_todo_service(session: AsyncSession = Depends(db_session)) -> TodoService:
    return TodoService(TodoStore(session))
