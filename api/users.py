"""
User API routes — register, login.

Route prefix: /api/users
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from api.dependencies import get_authenticator
from auth.authenticator import Authenticator
from database.models import User

logger = logging.getLogger(__name__)

router = APIRouter(tags=["users"])


# ── Request / response schemas ─────────────────────────────────────────


class RegisterRequest(BaseModel):
    name: str
    email: str
    password: str


class LoginRequest(BaseModel):
    email: str
    password: str


class AuthResponse(BaseModel):
    id: str
    name: str
    email: str
    token: str


def _auth_payload(user: User, token: str) -> Dict[str, Any]:
    return {
        "id": str(user.user_id),
        "name": user.name,
        "email": user.email,
        "token": token,
    }


# ── Endpoints ──────────────────────────────────────────────────────────


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    req: RegisterRequest,
    authenticator: Authenticator = Depends(get_authenticator),
) -> Dict[str, Any]:
    """Register a new user."""
    user, token = await authenticator.register(req.name, req.email, req.password)
    return _auth_payload(user, token)


@router.post("/login", response_model=AuthResponse)
async def login(
    req: LoginRequest,
    authenticator: Authenticator = Depends(get_authenticator),
) -> Dict[str, Any]:
    """Login with email + password."""
    user, token = await authenticator.login(req.email, req.password)
    return _auth_payload(user, token)
