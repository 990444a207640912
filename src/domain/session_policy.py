from datetime import timedelta

from pydantic import BaseModel, Field

from src.domain.entities import SessionEviction


class SessionPolicy(BaseModel):
    """Session lifetime and retention settings handed to the use cases"""

    session_lifetime_days: int = Field(default=7, ge=1)
    max_sessions: int = Field(default=20, ge=1)
    eviction: SessionEviction = SessionEviction.inactive_first
    max_write_attempts: int = Field(default=3, ge=1)

    @property
    def session_lifetime(self) -> timedelta:
        return timedelta(days=self.session_lifetime_days)
