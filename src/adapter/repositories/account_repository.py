from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlmodel import col, delete, select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.errors import translate_store_errors
from src.adapter.repositories.tables import AccountRow, SessionRecordRow
from src.app.repositories.account_repository import IAccountRepository
from src.domain.entities import Account, SessionRecord
from src.domain.errors import ConflictError, StaleAccountError


class AccountRepository(IAccountRepository):
    """Account repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_by_email(self, email: str) -> Optional[Account]:
        """Get account by normalized email address"""
        stmt = select(AccountRow).where(AccountRow.email == email)
        return await self._load_one(stmt)

    async def find_by_id(self, account_id: UUID) -> Optional[Account]:
        """Get account by ID"""
        stmt = select(AccountRow).where(AccountRow.id == account_id)
        return await self._load_one(stmt)

    async def find_by_session_digest(self, secret_digest: str) -> Optional[Account]:
        """Get the account owning the session record with this digest"""
        stmt = (
            select(AccountRow)
            .join(SessionRecordRow, SessionRecordRow.account_id == AccountRow.id)
            .where(SessionRecordRow.secret_digest == secret_digest)
        )
        return await self._load_one(stmt)

    async def insert(self, account: Account) -> Account:
        """Create a new account with its session records"""
        with translate_store_errors("insert"):
            self.session.add(
                AccountRow(
                    id=account.id,
                    display_name=account.display_name,
                    email=account.email,
                    password_digest=account.password_digest,
                    version=account.version,
                    created_at=account.created_at,
                )
            )
            try:
                await self.session.flush()
            except IntegrityError as exc:
                raise ConflictError(
                    "EMAIL_ALREADY_EXISTS", "Email already registered"
                ) from exc

            self.session.add_all(self._session_rows(account))
            await self.session.flush()
        return account

    async def replace(self, account: Account) -> Account:
        """
        Overwrite the account row and its whole session collection.

        The row update only matches while the stored version still equals
        account.version; on success account.version is bumped.
        """
        with translate_store_errors("replace"):
            stmt = (
                update(AccountRow)
                .where(AccountRow.id == account.id, AccountRow.version == account.version)
                .values(
                    display_name=account.display_name,
                    email=account.email,
                    password_digest=account.password_digest,
                    version=account.version + 1,
                )
            )
            result = await self.session.execute(stmt)
            if result.rowcount != 1:
                raise StaleAccountError(
                    "STALE_ACCOUNT", f"Account {account.id} was modified concurrently"
                )

            await self.session.execute(
                delete(SessionRecordRow).where(SessionRecordRow.account_id == account.id)
            )
            self.session.add_all(self._session_rows(account))
            await self.session.flush()

        account.version += 1
        return account

    async def _load_one(self, stmt) -> Optional[Account]:
        with translate_store_errors("read"):
            result = await self.session.exec(
                stmt.execution_options(populate_existing=True)
            )
            row = result.first()
            if row is None:
                return None
            sessions = await self._load_sessions(row.id)

        return Account(
            id=row.id,
            display_name=row.display_name,
            email=row.email,
            password_digest=row.password_digest,
            created_at=row.created_at,
            version=row.version,
            sessions=sessions,
        )

    async def _load_sessions(self, account_id: UUID) -> List[SessionRecord]:
        """Session records newest first"""
        stmt = (
            select(SessionRecordRow)
            .where(SessionRecordRow.account_id == account_id)
            .order_by(col(SessionRecordRow.created_at).desc(), col(SessionRecordRow.id).desc())
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        return [
            SessionRecord(
                secret_digest=row.secret_digest,
                created_at=row.created_at,
                expires_at=row.expires_at,
                revoked_at=row.revoked_at,
                replaced_by_digest=row.replaced_by_digest,
            )
            for row in result.all()
        ]

    @staticmethod
    def _session_rows(account: Account) -> List[SessionRecordRow]:
        # Oldest first so surrogate ids grow with recency
        return [
            SessionRecordRow(
                account_id=account.id,
                secret_digest=record.secret_digest,
                replaced_by_digest=record.replaced_by_digest,
                created_at=record.created_at,
                expires_at=record.expires_at,
                revoked_at=record.revoked_at,
            )
            for record in reversed(account.sessions)
        ]
