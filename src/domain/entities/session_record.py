"""
SessionRecord Entity

One issued refresh credential, embedded in its owning Account.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Field, SQLModel

from src.domain.base import utcnow


class SessionRecord(SQLModel):
    """
    SessionRecord - state of one refresh token.

    Business Rules:
    - Only the SHA-256 digest of the raw secret is kept
    - revoked_at is set once and never cleared
    - replaced_by_digest is set once, on rotation
    - Active while not revoked and not yet expired
    """

    secret_digest: str = Field(max_length=64)
    created_at: datetime = Field(default_factory=utcnow)
    expires_at: datetime
    revoked_at: Optional[datetime] = None
    replaced_by_digest: Optional[str] = Field(default=None, max_length=64)

    def is_active(self, now: Optional[datetime] = None) -> bool:
        now = now or utcnow()
        return self.revoked_at is None and now < self.expires_at

    def revoke(self, now: datetime) -> bool:
        """Mark revoked. Returns False when it already was."""
        if self.revoked_at is not None:
            return False
        self.revoked_at = now
        return True

    def rotate_to(self, successor: "SessionRecord", now: datetime) -> None:
        if self.replaced_by_digest is not None:
            raise ValueError("Session record has already been rotated")
        self.revoke(now)
        self.replaced_by_digest = successor.secret_digest
