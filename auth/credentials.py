"""
Credential store: user identity records backed by the ``users`` table.

Passwords are hashed with bcrypt (auto-salted, configurable work factor);
only the hash is ever stored.
"""

from __future__ import annotations

import logging
import uuid
from functools import lru_cache
from typing import Optional

import bcrypt
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import DuplicateEmail, Infrastructure
from database.models import User

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes of its input.
MAX_PASSWORD_BYTES = 72


def normalize_email(email: str) -> str:
    return email.strip().lower()


@lru_cache(maxsize=None)
def _dummy_hash(rounds: int) -> bytes:
    """Hash checked when no user matches, so misses cost as much as hits."""
    return bcrypt.hashpw(b"no-such-user", bcrypt.gensalt(rounds=rounds))


class CredentialStore:
    """Looks up, creates and checks users.  Never stores a raw password."""

    def __init__(self, session: AsyncSession, bcrypt_rounds: int = 12) -> None:
        self._session = session
        self._bcrypt_rounds = bcrypt_rounds

    def _hash(self, raw_password: str) -> str:
        return bcrypt.hashpw(
            raw_password.encode(), bcrypt.gensalt(rounds=self._bcrypt_rounds),
        ).decode()

    async def find_by_email(self, email: str) -> Optional[User]:
        result = await self._session.execute(
            select(User).where(User.email == normalize_email(email))
        )
        return result.scalar_one_or_none()

    async def create(self, name: str, email: str, raw_password: str) -> User:
        email = normalize_email(email)
        if await self.find_by_email(email) is not None:
            raise DuplicateEmail()

        user = User(
            user_id=uuid.uuid4(),
            name=name,
            email=email,
            password_hash=self._hash(raw_password),
        )
        self._session.add(user)
        try:
            await self._session.flush()
        except IntegrityError as exc:
            # Lost a race with a concurrent registration for the same email.
            await self._session.rollback()
            raise DuplicateEmail() from exc
        return user

    async def commit(self) -> None:
        try:
            await self._session.commit()
        except IntegrityError as exc:
            await self._session.rollback()
            raise DuplicateEmail() from exc
        except SQLAlchemyError as exc:
            logger.exception("Commit failed while saving user")
            raise Infrastructure() from exc

    def verify_password(self, user: Optional[User], raw_password: str) -> bool:
        """
        Constant-time comparison against the stored bcrypt hash.

        ``user`` may be ``None``; a dummy hash is checked instead and the
        result is always ``False``.
        """
        if user is None:
            hashed = _dummy_hash(self._bcrypt_rounds)
        else:
            hashed = user.password_hash.encode()
        try:
            matched = bcrypt.checkpw(raw_password.encode(), hashed)
        except (ValueError, TypeError):
            return False
        return matched and user is not None
