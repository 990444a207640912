from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from src.domain.entities import Account


class IAccountRepository(ABC):
    """Account repository interface - application layer"""

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[Account]:
        """Get account by normalized email address"""
        pass

    @abstractmethod
    async def find_by_id(self, account_id: UUID) -> Optional[Account]:
        """Get account by ID"""
        pass

    @abstractmethod
    async def find_by_session_digest(self, secret_digest: str) -> Optional[Account]:
        """Get the account owning the session record with this digest"""
        pass

    @abstractmethod
    async def insert(self, account: Account) -> Account:
        """Create a new account. Raises ConflictError on duplicate email."""
        pass

    @abstractmethod
    async def replace(self, account: Account) -> Account:
        """
        Overwrite the whole account, sessions included.

        Raises StaleAccountError when the stored version moved on since
        the account was read.
        """
        pass
