"""
Get Account Use Case

Loads the account behind a verified access token.
"""

from uuid import UUID

from result import Err, Ok, Result

from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth.dtos import AccountInfo
from src.domain.errors import AuthError, CredentialError


class GetAccountUseCase:
    """
    Use case for loading the current account.

    Business Rules:
    - Account id comes from the access token subject
    - A token for a missing account is treated as invalid
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, account_id: UUID) -> Result[AccountInfo, CredentialError]:
        async with self.uow:
            account = await self.uow.accounts.find_by_id(account_id)
            if account is None:
                return Err(AuthError("INVALID_TOKEN", "Invalid or expired token"))

            return Ok(AccountInfo.from_account(account))
