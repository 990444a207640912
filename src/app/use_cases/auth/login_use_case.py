"""
Login Use Case

Authenticates by email and password and opens a new session.
"""

import logging

from result import Err, Ok, Result

from src.app.services.token_codec import ITokenCodec
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import is_storable_text, normalize_email
from src.domain.errors import AuthError, CredentialError
from src.domain.session_policy import SessionPolicy
from .dtos import AccountInfo, AuthResponse
from .session_issuer import add_session, issue_session, run_with_retry

logger = logging.getLogger(__name__)


def invalid_credentials() -> AuthError:
    return AuthError("INVALID_CREDENTIALS", "Invalid credentials")


class LoginUseCase:
    """
    Use case for login and session issuance.

    Business Rules:
    - Unknown email and wrong password fail identically (no enumeration)
    - A password hash is computed even when the account is missing
    - Every login appends a new session record to the account
    - The session window caps retained records (default 20)
    - Account replace is version-checked and retried on conflict
    """

    def __init__(self, uow: UnitOfWork, codec: ITokenCodec, policy: SessionPolicy):
        self.uow = uow
        self.codec = codec
        self.policy = policy

    async def execute(
        self, email: str, password: str
    ) -> Result[AuthResponse, CredentialError]:
        """
        Execute login use case.

        Args:
            email: Account email (normalized here)
            password: Plain text password

        Returns:
            Result with AuthResponse containing tokens, or Err(AuthError)
        """
        email = normalize_email(email)
        password = password or ""

        if not is_storable_text(email):
            # No account can carry this email
            self.codec.hash_password(password)
            return Err(invalid_credentials())

        async def attempt() -> Result[AuthResponse, CredentialError]:
            account = await self.uow.accounts.find_by_email(email)

            if account is None:
                # Same bcrypt cost as a real check
                self.codec.hash_password(password)
                return Err(invalid_credentials())

            if not self.codec.verify_password(password, account.password_digest):
                return Err(invalid_credentials())

            now = utcnow()
            raw_secret, record = issue_session(self.codec, self.policy, now)
            add_session(account, record, self.policy, now)

            await self.uow.accounts.replace(account)
            await self.uow.commit()

            logger.info("Account %s logged in", account.id)

            return Ok(
                AuthResponse(
                    access_token=self.codec.mint_access_credential(account),
                    refresh_token=raw_secret,
                    account=AccountInfo.from_account(account),
                )
            )

        return await run_with_retry(self.uow, self.policy, attempt)
