from datetime import timedelta

import pytest
from unittest.mock import AsyncMock, MagicMock

from src.adapter.services.token_codec import JwtTokenCodec
from src.domain.base import utcnow
from src.domain.entities import Account, SessionRecord
from src.domain.session_policy import SessionPolicy


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.accounts = MagicMock()
    uow.accounts.find_by_email = AsyncMock(return_value=None)
    uow.accounts.find_by_id = AsyncMock(return_value=None)
    uow.accounts.find_by_session_digest = AsyncMock(return_value=None)
    uow.accounts.insert = AsyncMock()
    uow.accounts.replace = AsyncMock()
    return uow


@pytest.fixture
def codec():
    """Real codec with the cheapest bcrypt cost"""
    return JwtTokenCodec(
        secret_key="unit-test-secret",
        issuer="unit-tests",
        audience="unit-test-clients",
        access_token_minutes=15,
        bcrypt_rounds=4,
    )


@pytest.fixture
def policy():
    return SessionPolicy()


@pytest.fixture
def make_account(codec):
    """Build an account whose password is `password` and optional live sessions"""

    def _make(email="ada@x.com", password="password1", secrets=()):
        now = utcnow()
        account = Account(
            display_name="Ada",
            email=email,
            password_digest=codec.hash_password(password),
        )
        for offset, secret in enumerate(secrets):
            account.sessions.insert(
                0,
                SessionRecord(
                    secret_digest=codec.digest(secret),
                    created_at=now - timedelta(minutes=len(secrets) - offset),
                    expires_at=now + timedelta(days=7),
                ),
            )
        return account

    return _make
