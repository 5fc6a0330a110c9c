"""
Domain errors raised by the auth and todo layers.

Each class carries the HTTP status it maps to and a client-safe ``detail``;
``api.errors`` turns them into JSON responses.
"""

from __future__ import annotations


class TodoAppError(Exception):
    status_code: int = 500
    default_detail: str = "Something went wrong"

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class ValidationError(TodoAppError):
    status_code = 400
    default_detail = "Invalid input"


class DuplicateEmail(TodoAppError):
    status_code = 400
    default_detail = "User already exists"


class InvalidCredentials(TodoAppError):
    status_code = 401
    default_detail = "Invalid email or password"


class Unauthenticated(TodoAppError):
    status_code = 401
    default_detail = "Not authorized, invalid or missing token"


class Forbidden(TodoAppError):
    status_code = 401
    default_detail = "Not authorized"


class NotFound(TodoAppError):
    status_code = 404
    default_detail = "Todo not found"


class Infrastructure(TodoAppError):
    status_code = 500
    default_detail = "Something went wrong"


# ── Token Service internals (never surfaced to clients) ─────────────────


class InvalidToken(Exception):
    """Malformed token or signature mismatch."""


class ExpiredToken(Exception):
    """Signature is valid but the embedded expiry has passed."""
