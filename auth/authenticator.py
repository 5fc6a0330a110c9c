"""
Authenticator: register and login on top of the credential store and
token service.
"""

from __future__ import annotations

import logging
import re
from typing import Tuple

from auth.credentials import MAX_PASSWORD_BYTES, CredentialStore, normalize_email
from auth.tokens import TokenService
from core.exceptions import DuplicateEmail, InvalidCredentials, ValidationError
from database.models import User

logger = logging.getLogger(__name__)

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _validate_registration(name: str, email: str, raw_password: str) -> None:
    if not name or not name.strip():
        raise ValidationError("Please add a name")
    if len(name.strip()) > 128:
        raise ValidationError("Name cannot be more than 128 characters")
    if not email or not _EMAIL_RE.match(normalize_email(email)):
        raise ValidationError("Please add a valid email")
    if len(normalize_email(email)) > 255:
        raise ValidationError("Email cannot be more than 255 characters")
    if not raw_password:
        raise ValidationError("Please add a password")
    if len(raw_password.encode()) > MAX_PASSWORD_BYTES:
        raise ValidationError(
            f"Password cannot be more than {MAX_PASSWORD_BYTES} bytes"
        )


class Authenticator:
    def __init__(self, credentials: CredentialStore, tokens: TokenService) -> None:
        self._credentials = credentials
        self._tokens = tokens

    async def register(
        self, name: str, email: str, raw_password: str,
    ) -> Tuple[User, str]:
        """Create a user and return it together with a fresh token."""
        _validate_registration(name, email, raw_password)

        if await self._credentials.find_by_email(email) is not None:
            logger.info("Registration rejected: email already in use")
            raise DuplicateEmail()

        user = await self._credentials.create(name.strip(), email, raw_password)
        await self._credentials.commit()
        token = self._tokens.issue(str(user.user_id))
        logger.info("Registered user %s (%s)", user.name, user.user_id)
        return user, token

    async def login(self, email: str, raw_password: str) -> Tuple[User, str]:
        """Login with email + password."""
        user = await self._credentials.find_by_email(email or "")

        # Checked even when ``user`` is None so both failures take as long.
        if not self._credentials.verify_password(user, raw_password or "") or user is None:
            logger.info("Login failed")
            raise InvalidCredentials()

        token = self._tokens.issue(str(user.user_id))
        logger.info("Login: %s (%s)", user.name, user.user_id)
        return user, token
