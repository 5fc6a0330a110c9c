"""
FastAPI dependencies for authentication.

``get_current_identity`` is the access guard applied to every protected
route: it resolves the Bearer token to an ``Identity`` and attaches it to
``request.state``.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import Optional

from fastapi import Header, Request

from auth.tokens import TokenService
from core.exceptions import ExpiredToken, InvalidToken, Unauthenticated

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identity:
    """The acting user for the current request."""

    user_id: uuid.UUID


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def _extract_bearer(authorization: Optional[str]) -> str:
    if not authorization:
        raise Unauthenticated()
    scheme, _, token = authorization.partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        raise Unauthenticated()
    return token


async def get_current_identity(
    request: Request,
    authorization: Optional[str] = Header(None, alias="Authorization"),
) -> Identity:
    """
    Extract and verify the Bearer token from the Authorization header.
    Returns the authenticated ``Identity``.
    """
    token = _extract_bearer(authorization)
    tokens = get_token_service(request)
    try:
        user_id = tokens.verify(token)
    except (InvalidToken, ExpiredToken) as exc:
        logger.debug("Rejected token on %s %s: %s", request.method, request.url.path, exc)
        raise Unauthenticated() from exc

    try:
        identity = Identity(user_id=uuid.UUID(user_id))
    except ValueError as exc:
        raise Unauthenticated() from exc

    request.state.identity = identity
    return identity
