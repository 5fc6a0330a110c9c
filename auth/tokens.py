"""
JWT-style token creation and verification.

Tokens are base64url-encoded JSON payloads signed with HMAC-SHA256::

    <b64url({"user_id": ..., "exp": ...})>.<hex hmac>

The secret is passed in from ``Settings.jwt_secret`` when the application is
built.  Changing it invalidates every outstanding token.
"""

from __future__ import annotations

import binascii
import hashlib
import hmac
import json
import time
from base64 import urlsafe_b64decode, urlsafe_b64encode
from typing import Callable

from core.exceptions import ExpiredToken, InvalidToken


class TokenService:
    def __init__(
        self,
        secret: str,
        expiry_seconds: int,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if not secret:
            raise ValueError("Token secret must not be empty")
        self._secret = secret.encode()
        self._expiry_seconds = expiry_seconds
        self._clock = clock

    def _sign(self, raw: bytes) -> str:
        return hmac.new(self._secret, raw, hashlib.sha256).hexdigest()

    def issue(self, user_id: str) -> str:
        """Create a signed token containing ``user_id`` and expiry."""
        payload = {
            "user_id": str(user_id),
            "exp": int(self._clock()) + self._expiry_seconds,
        }
        raw = json.dumps(payload, separators=(",", ":")).encode()
        return urlsafe_b64encode(raw).decode() + "." + self._sign(raw)

    def verify(self, token: str) -> str:
        """
        Verify token and return ``user_id``.

        Raises ``InvalidToken`` for anything malformed or wrongly signed and
        ``ExpiredToken`` once the embedded expiry has passed.
        """
        parts = token.split(".")
        if len(parts) != 2 or not parts[0] or not parts[1]:
            raise InvalidToken("bad format")
        try:
            raw = urlsafe_b64decode(parts[0].encode())
        except (binascii.Error, ValueError) as exc:
            raise InvalidToken("bad encoding") from exc

        if not hmac.compare_digest(parts[1].encode(), self._sign(raw).encode()):
            raise InvalidToken("bad signature")

        try:
            payload = json.loads(raw)
        except ValueError as exc:
            raise InvalidToken("bad payload") from exc
        if not isinstance(payload, dict):
            raise InvalidToken("bad payload")

        user_id = payload.get("user_id")
        exp = payload.get("exp")
        if not isinstance(user_id, str) or not isinstance(exp, int) or isinstance(exp, bool):
            raise InvalidToken("missing claims")
        if self._clock() > exp:
            raise ExpiredToken("token expired")
        return user_id
