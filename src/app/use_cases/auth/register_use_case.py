"""
Register Use Case

Creates an account and issues its first session.
"""

import logging

from result import Err, Ok, Result

from src.app.services.token_codec import ITokenCodec
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import (
    MAX_TEXT_LENGTH,
    Account,
    is_storable_text,
    normalize_email,
)
from src.domain.errors import ConflictError, CredentialError, ValidationError
from src.domain.session_policy import SessionPolicy
from .dtos import AccountInfo, AuthResponse, RegisterCommand
from .session_issuer import add_session, issue_session

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8


class RegisterUseCase:
    """
    Register Use Case

    Command/Response Pattern:
    - Input: RegisterCommand
    - Output: Result[AuthResponse, CredentialError]

    Business Logic:
    1. Validate display name and email (non-blank, at most 255 chars),
       password (not whitespace only, 8+ chars)
    2. Normalize email (trim + lowercase) before lookup and storage
    3. Reject duplicate email (ConflictError)
    4. Hash password with bcrypt
    5. Issue the first session record (digest only is stored)
    6. Insert account and commit
    7. Return access token plus the raw session secret
    """

    def __init__(self, uow: UnitOfWork, codec: ITokenCodec, policy: SessionPolicy):
        self.uow = uow
        self.codec = codec
        self.policy = policy

    async def execute(
        self, command: RegisterCommand
    ) -> Result[AuthResponse, CredentialError]:
        """
        Execute register use case

        Args:
            command: RegisterCommand with display name, email and password

        Returns:
            Result[AuthResponse] with tokens and account info,
            Err(ValidationError) for bad input,
            or Err(ConflictError) if the email is already registered
        """
        display_name = (command.display_name or "").strip()
        email = normalize_email(command.email)
        password = command.password or ""

        if not display_name:
            return Err(ValidationError("INVALID_DISPLAY_NAME", "Display name is required"))
        if len(display_name) > MAX_TEXT_LENGTH or not is_storable_text(display_name):
            return Err(
                ValidationError(
                    "INVALID_DISPLAY_NAME",
                    f"Display name must be valid text of at most {MAX_TEXT_LENGTH} characters",
                )
            )
        if not email:
            return Err(ValidationError("INVALID_EMAIL", "Email is required"))
        if len(email) > MAX_TEXT_LENGTH or not is_storable_text(email):
            return Err(
                ValidationError(
                    "INVALID_EMAIL",
                    f"Email must be valid text of at most {MAX_TEXT_LENGTH} characters",
                )
            )
        if not password.strip():
            return Err(ValidationError("INVALID_PASSWORD", "Password is required"))
        if len(password) < MIN_PASSWORD_LENGTH:
            return Err(
                ValidationError(
                    "INVALID_PASSWORD",
                    f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
                )
            )

        async with self.uow:
            existing = await self.uow.accounts.find_by_email(email)
            if existing is not None:
                return Err(ConflictError("EMAIL_ALREADY_EXISTS", "Email already registered"))

            now = utcnow()
            account = Account(
                display_name=display_name,
                email=email,
                password_digest=self.codec.hash_password(password),
                created_at=now,
            )

            raw_secret, record = issue_session(self.codec, self.policy, now)
            add_session(account, record, self.policy, now)

            try:
                await self.uow.accounts.insert(account)
            except ConflictError as exc:
                # Lost a race against a concurrent registration
                return Err(exc)

            await self.uow.commit()

        logger.info("Registered account %s", account.id)

        return Ok(
            AuthResponse(
                access_token=self.codec.mint_access_credential(account),
                refresh_token=raw_secret,
                account=AccountInfo.from_account(account),
            )
        )
