"""
Account Entity

A registered user together with the session records issued to them.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel

from src.domain.base import utcnow
from .session_record import SessionRecord

MAX_TEXT_LENGTH = 255


class Account(SQLModel):
    """
    Account - the whole record the credential use cases read and replace.

    Business Rules:
    - Email is trimmed, lower-cased and unique across all accounts
    - Password stored as bcrypt hash only
    - sessions are ordered newest first and capped by the session window
    - version grows by one on every successful replace
    """

    id: UUID = Field(default_factory=uuid4)
    display_name: str = Field(max_length=MAX_TEXT_LENGTH)
    email: str = Field(max_length=MAX_TEXT_LENGTH)
    password_digest: str = Field(max_length=60)
    created_at: datetime = Field(default_factory=utcnow)
    version: int = 1

    sessions: List[SessionRecord] = Field(default_factory=list)

    def find_session(self, secret_digest: str) -> Optional[SessionRecord]:
        for record in self.sessions:
            if record.secret_digest == secret_digest:
                return record
        return None


def normalize_email(email: Optional[str]) -> str:
    return (email or "").strip().lower()


def is_storable_text(value: Optional[str]) -> bool:
    """False for strings holding lone surrogates, which cannot be UTF-8 encoded"""
    try:
        (value or "").encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True
