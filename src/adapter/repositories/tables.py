"""
Account Store Tables

Accounts and their session records. The unique secret_digest index on
session_records is the digest -> account lookup path; it is written in the
same transaction as the account row.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlmodel import Column, DateTime, Field, Index, SQLModel


class AccountRow(SQLModel, table=True):
    """Persisted account. version guards whole-record replaces."""

    __tablename__ = "accounts"

    id: UUID = Field(primary_key=True)
    display_name: str = Field(max_length=255)
    email: str = Field(unique=True, index=True, max_length=255)
    password_digest: str = Field(max_length=60)  # Bcrypt output is 60 chars
    version: int = Field(default=1, nullable=False)

    created_at: datetime = Field(sa_column=Column(DateTime, nullable=False))


class SessionRecordRow(SQLModel, table=True):
    """Persisted session record, owned by one account"""

    __tablename__ = "session_records"

    # Surrogate key; rows are rewritten on every account replace
    id: Optional[int] = Field(default=None, primary_key=True)

    account_id: UUID = Field(foreign_key="accounts.id", nullable=False, index=True)
    secret_digest: str = Field(unique=True, index=True, max_length=64)  # SHA-256 hex
    replaced_by_digest: Optional[str] = Field(default=None, max_length=64)

    # Timestamps
    created_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    revoked_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_session_record_account_created", "account_id", "created_at"),
    )
