"""
Revoke Token Use Case

Revokes a session secret on logout. Always succeeds: blank, unknown or
already revoked secrets are no-ops.
"""

import logging

from result import Ok, Result

from src.app.services.token_codec import ITokenCodec
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.errors import CredentialError
from src.domain.session_policy import SessionPolicy
from .session_issuer import run_with_retry

logger = logging.getLogger(__name__)


class RevokeTokenUseCase:
    """
    Use case for revoking a single session secret.

    Business Rules:
    - Idempotent: revoking twice keeps the first revoked_at
    - Unknown secrets are not reported (no enumeration)
    - No write happens when nothing changed
    """

    def __init__(self, uow: UnitOfWork, codec: ITokenCodec, policy: SessionPolicy):
        self.uow = uow
        self.codec = codec
        self.policy = policy

    async def execute(self, refresh_token: str) -> Result[bool, CredentialError]:
        """
        Execute revoke token use case.

        Args:
            refresh_token: The raw session secret, possibly blank

        Returns:
            Ok(True) if a record was revoked now, Ok(False) for every no-op
        """
        if not refresh_token or not refresh_token.strip():
            return Ok(False)

        secret_digest = self.codec.digest(refresh_token)

        async def attempt() -> Result[bool, CredentialError]:
            account = await self.uow.accounts.find_by_session_digest(secret_digest)
            if account is None:
                return Ok(False)

            record = account.find_session(secret_digest)
            if record is None or not record.revoke(utcnow()):
                return Ok(False)

            await self.uow.accounts.replace(account)
            await self.uow.commit()

            logger.info("Revoked session for account %s", account.id)
            return Ok(True)

        return await run_with_retry(self.uow, self.policy, attempt)
