"""
Refresh Token Use Case

Exchanges a session secret for a new access token, rotating the secret.
"""

import logging

from result import Err, Ok, Result

from src.app.services.token_codec import ITokenCodec
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.errors import AuthError, CredentialError
from src.domain.session_policy import SessionPolicy
from .dtos import RefreshTokenResponse
from .session_issuer import add_session, issue_session, run_with_retry

logger = logging.getLogger(__name__)


class RefreshTokenUseCase:
    """
    Use case for refreshing access tokens.

    Business Rules:
    - Refresh token rotation: old record revoked, new record issued,
      old record points at its successor through replaced_by_digest
    - Rotation is one account replace (one commit)
    - Revoked or expired records cannot be refreshed
    - A rotated secret is permanently unusable
    - Concurrent refreshes of the same secret: the version check makes
      the loser re-read and fail on the revoked record
    """

    def __init__(self, uow: UnitOfWork, codec: ITokenCodec, policy: SessionPolicy):
        self.uow = uow
        self.codec = codec
        self.policy = policy

    async def execute(
        self, refresh_token: str
    ) -> Result[RefreshTokenResponse, CredentialError]:
        """
        Execute refresh token use case.

        Args:
            refresh_token: The raw session secret to verify and rotate

        Returns:
            Result with RefreshTokenResponse containing new tokens, or Err(AuthError)
        """
        if not refresh_token or not refresh_token.strip():
            return Err(AuthError("MISSING_REFRESH_TOKEN", "Missing refresh token"))

        secret_digest = self.codec.digest(refresh_token)

        async def attempt() -> Result[RefreshTokenResponse, CredentialError]:
            account = await self.uow.accounts.find_by_session_digest(secret_digest)
            if account is None:
                return Err(AuthError("INVALID_TOKEN", "Invalid refresh token"))

            now = utcnow()
            existing = account.find_session(secret_digest)
            if existing is None or not existing.is_active(now):
                return Err(
                    AuthError("INVALID_TOKEN", "Refresh token expired or revoked")
                )

            new_secret, replacement = issue_session(self.codec, self.policy, now)
            existing.rotate_to(replacement, now)
            add_session(account, replacement, self.policy, now)

            await self.uow.accounts.replace(account)
            await self.uow.commit()

            logger.info("Rotated session for account %s", account.id)

            return Ok(
                RefreshTokenResponse(
                    access_token=self.codec.mint_access_credential(account),
                    refresh_token=new_secret,
                )
            )

        return await run_with_retry(self.uow, self.policy, attempt)
