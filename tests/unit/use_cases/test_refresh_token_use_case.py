from datetime import timedelta
from unittest.mock import AsyncMock

import pytest

from src.app.use_cases.auth.refresh_token_use_case import RefreshTokenUseCase
from src.domain.base import utcnow
from src.domain.errors import AuthError, StaleAccountError


@pytest.mark.asyncio
async def test_successful_refresh_rotates_record(mock_uow, codec, policy, make_account):
    """Old record revoked and linked to its successor in one replace"""
    account = make_account(secrets=["raw-secret"])
    mock_uow.accounts.find_by_session_digest.return_value = account
    old_digest = codec.digest("raw-secret")

    use_case = RefreshTokenUseCase(mock_uow, codec, policy)
    result = await use_case.execute("raw-secret")

    assert result.is_ok()
    data = result.ok_value
    assert data.refresh_token != "raw-secret"
    assert codec.verify_access_credential(data.access_token)["sub"] == str(account.id)

    new_digest = codec.digest(data.refresh_token)
    old_record = account.find_session(old_digest)
    new_record = account.find_session(new_digest)
    assert old_record.revoked_at is not None
    assert old_record.replaced_by_digest == new_digest
    assert new_record.is_active()
    assert account.sessions[0] is new_record

    mock_uow.accounts.find_by_session_digest.assert_called_once_with(old_digest)
    mock_uow.accounts.replace.assert_called_once_with(account)
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_refresh_twice_with_same_secret_fails(mock_uow, codec, policy, make_account):
    """A rotated secret cannot be used again"""
    account = make_account(secrets=["raw-secret"])
    mock_uow.accounts.find_by_session_digest.return_value = account
    use_case = RefreshTokenUseCase(mock_uow, codec, policy)

    first = await use_case.execute("raw-secret")
    second = await use_case.execute("raw-secret")

    assert first.is_ok()
    assert second.is_err()
    assert isinstance(second.err_value, AuthError)
    assert mock_uow.commit.call_count == 1


@pytest.mark.asyncio
@pytest.mark.parametrize("raw", ["", "   ", None])
async def test_refresh_blank_secret(mock_uow, codec, policy, raw):
    use_case = RefreshTokenUseCase(mock_uow, codec, policy)

    result = await use_case.execute(raw)

    assert result.is_err()
    assert isinstance(result.err_value, AuthError)
    assert result.err_value.code == "MISSING_REFRESH_TOKEN"
    mock_uow.accounts.find_by_session_digest.assert_not_called()


@pytest.mark.asyncio
async def test_refresh_unknown_secret(mock_uow, codec, policy):
    use_case = RefreshTokenUseCase(mock_uow, codec, policy)

    result = await use_case.execute("never-issued")

    assert result.is_err()
    assert isinstance(result.err_value, AuthError)
    assert result.err_value.code == "INVALID_TOKEN"
    mock_uow.accounts.replace.assert_not_called()


@pytest.mark.asyncio
async def test_refresh_expired_record(mock_uow, codec, policy, make_account):
    account = make_account(secrets=["raw-secret"])
    account.sessions[0].expires_at = utcnow() - timedelta(seconds=1)
    mock_uow.accounts.find_by_session_digest.return_value = account

    use_case = RefreshTokenUseCase(mock_uow, codec, policy)
    result = await use_case.execute("raw-secret")

    assert result.is_err()
    assert result.err_value.code == "INVALID_TOKEN"
    assert account.sessions[0].revoked_at is None
    mock_uow.accounts.replace.assert_not_called()


@pytest.mark.asyncio
async def test_refresh_revoked_record(mock_uow, codec, policy, make_account):
    account = make_account(secrets=["raw-secret"])
    account.sessions[0].revoked_at = utcnow()
    mock_uow.accounts.find_by_session_digest.return_value = account

    use_case = RefreshTokenUseCase(mock_uow, codec, policy)
    result = await use_case.execute("raw-secret")

    assert result.is_err()
    assert isinstance(result.err_value, AuthError)
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_concurrent_refresh_loser_rereads_and_fails(
    mock_uow, codec, policy, make_account
):
    """
    The first replace is stale because another refresh rotated the record;
    the retry reads the winner's state and rejects the secret.
    """
    stale_copy = make_account(secrets=["raw-secret"])
    winner_state = stale_copy.model_copy(deep=True)
    winner_state.sessions[0].revoked_at = utcnow()
    winner_state.sessions[0].replaced_by_digest = codec.digest("winner-secret")

    mock_uow.accounts.find_by_session_digest = AsyncMock(
        side_effect=[stale_copy, winner_state]
    )
    mock_uow.accounts.replace = AsyncMock(
        side_effect=StaleAccountError("STALE_ACCOUNT", "changed")
    )

    use_case = RefreshTokenUseCase(mock_uow, codec, policy)
    result = await use_case.execute("raw-secret")

    assert result.is_err()
    assert isinstance(result.err_value, AuthError)
    assert mock_uow.accounts.replace.call_count == 1
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_refresh_non_utf8_secret(mock_uow, codec, policy):
    use_case = RefreshTokenUseCase(mock_uow, codec, policy)

    result = await use_case.execute("\ud800abc")

    assert result.is_err()
    assert isinstance(result.err_value, AuthError)
    assert result.err_value.code == "INVALID_TOKEN"
    mock_uow.accounts.replace.assert_not_called()
