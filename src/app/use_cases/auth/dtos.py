"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for the credential lifecycle.
Only raw session secrets and access tokens ever leave the use cases;
digests and session record fields stay inside.
"""

from datetime import datetime

from pydantic import BaseModel

from src.domain.entities import Account


# ============================================================================
# Command DTOs
# ============================================================================


class RegisterCommand(BaseModel):
    """
    Register command - represents registration intent

    Created by API layer from the HTTP payload. Field rules (non-blank
    name and email, 8+ character password) are enforced by the use case.
    """

    display_name: str
    email: str
    password: str


# ============================================================================
# Response DTOs
# ============================================================================


class AccountInfo(BaseModel):
    """Public account view"""

    id: str
    display_name: str
    email: str
    created_at: datetime

    @classmethod
    def from_account(cls, account: Account) -> "AccountInfo":
        return cls(
            id=str(account.id),
            display_name=account.display_name,
            email=account.email,
            created_at=account.created_at,
        )


class AuthResponse(BaseModel):
    """Response for register and login use cases"""

    access_token: str
    refresh_token: str
    account: AccountInfo


class RefreshTokenResponse(BaseModel):
    """Response for refresh token use case"""

    access_token: str
    refresh_token: str
