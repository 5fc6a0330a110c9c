"""
Tests for the credential store and authenticator.
"""

import uuid
from unittest.mock import AsyncMock, patch

import bcrypt
import pytest

from auth.authenticator import Authenticator
from auth.credentials import CredentialStore
from auth.tokens import TokenService
from core.exceptions import DuplicateEmail, InvalidCredentials, ValidationError
from database.models import User


@pytest.fixture
def tokens():
    return TokenService("test-secret", 30 * 24 * 3600)


@pytest.fixture
def credentials(session):
    return CredentialStore(session, bcrypt_rounds=4)


@pytest.fixture
def authenticator(credentials, tokens):
    return Authenticator(credentials, tokens)


class TestCredentialStore:
    @pytest.mark.asyncio
    async def test_create_stores_hash_not_password(self, credentials):
        user = await credentials.create("Alice", "a@x.com", "pw123456")
        assert user.password_hash != "pw123456"
        assert user.password_hash.startswith("$2")
        assert credentials.verify_password(user, "pw123456")
        assert not credentials.verify_password(user, "wrong")

    @pytest.mark.asyncio
    async def test_email_is_normalized(self, credentials):
        await credentials.create("Alice", "  Alice@X.com ", "pw123456")
        found = await credentials.find_by_email("alice@x.com")
        assert found is not None
        assert found.email == "alice@x.com"

    @pytest.mark.asyncio
    async def test_duplicate_email(self, credentials):
        await credentials.create("Alice", "a@x.com", "pw123456")
        with pytest.raises(DuplicateEmail):
            await credentials.create("Other", "A@X.COM", "different")

    @pytest.mark.asyncio
    async def test_find_missing(self, credentials):
        assert await credentials.find_by_email("nobody@x.com") is None

    @pytest.mark.asyncio
    async def test_concurrent_registration_hits_unique_index(self, session, credentials):
        session.add(User(
            user_id=uuid.uuid4(), name="Early", email="a@x.com", password_hash="x",
        ))
        await session.commit()

        # The other request read before the row above was committed.
        with patch.object(credentials, "find_by_email", AsyncMock(return_value=None)):
            with pytest.raises(DuplicateEmail):
                await credentials.create("Late", "a@x.com", "pw123456")

    @pytest.mark.asyncio
    async def test_unknown_user_still_runs_bcrypt(self, credentials):
        with patch("auth.credentials.bcrypt.checkpw", wraps=bcrypt.checkpw) as checkpw:
            assert credentials.verify_password(None, "pw123456") is False
        checkpw.assert_called_once()


class TestAuthenticator:
    @pytest.mark.asyncio
    async def test_register_then_login_same_user(self, authenticator, tokens):
        user, reg_token = await authenticator.register("Alice", "a@x.com", "pw123456")
        logged_in, login_token = await authenticator.login("a@x.com", "pw123456")

        assert logged_in.user_id == user.user_id
        assert tokens.verify(reg_token) == str(user.user_id)
        assert tokens.verify(login_token) == str(user.user_id)

    @pytest.mark.asyncio
    async def test_register_duplicate(self, authenticator):
        await authenticator.register("Alice", "a@x.com", "pw123456")
        with pytest.raises(DuplicateEmail):
            await authenticator.register("Alice 2", "a@x.com", "pw654321")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "name,email,password",
        [
            ("", "a@x.com", "pw123456"),
            ("   ", "a@x.com", "pw123456"),
            ("Alice", "", "pw123456"),
            ("Alice", "not-an-email", "pw123456"),
            ("Alice", "a@x", "pw123456"),
            ("Alice", "a@x.com", ""),
            ("Alice", "a@x.com", "p" * 73),
        ],
    )
    async def test_register_validation(self, authenticator, name, email, password):
        with pytest.raises(ValidationError):
            await authenticator.register(name, email, password)

    @pytest.mark.asyncio
    async def test_wrong_password_and_unknown_email_look_the_same(self, authenticator):
        await authenticator.register("Alice", "a@x.com", "pw123456")

        with pytest.raises(InvalidCredentials) as wrong_pw:
            await authenticator.login("a@x.com", "nope")
        with pytest.raises(InvalidCredentials) as unknown:
            await authenticator.login("ghost@x.com", "pw123456")

        assert type(wrong_pw.value) is type(unknown.value)
        assert wrong_pw.value.detail == unknown.value.detail
        assert wrong_pw.value.status_code == unknown.value.status_code == 401

    @pytest.mark.asyncio
    async def test_unknown_email_checks_a_hash_like_a_wrong_password(self, authenticator):
        await authenticator.register("Alice", "a@x.com", "pw123456")

        with patch("auth.credentials.bcrypt.checkpw", wraps=bcrypt.checkpw) as checkpw:
            with pytest.raises(InvalidCredentials):
                await authenticator.login("ghost@x.com", "pw123456")
            with pytest.raises(InvalidCredentials):
                await authenticator.login("a@x.com", "nope")

        assert checkpw.call_count == 2
