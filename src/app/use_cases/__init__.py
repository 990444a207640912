"""
Use Cases

Organized into domain folders:
- auth/: Credential lifecycle flows
- users/: Account lookups
"""

from .auth import (
    RegisterUseCase,
    RegisterCommand,
    LoginUseCase,
    RefreshTokenUseCase,
    RevokeTokenUseCase,
)
from .users import (
    GetAccountUseCase,
)

__all__ = [
    # Auth
    "RegisterUseCase",
    "RegisterCommand",
    "LoginUseCase",
    "RefreshTokenUseCase",
    "RevokeTokenUseCase",
    # Users
    "GetAccountUseCase",
]
