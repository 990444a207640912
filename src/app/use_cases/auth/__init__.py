"""
Authentication Use Cases

The credential lifecycle: register, login, refresh, revoke.
"""

from .register_use_case import RegisterUseCase
from .login_use_case import LoginUseCase
from .refresh_token_use_case import RefreshTokenUseCase
from .revoke_token_use_case import RevokeTokenUseCase
from .dtos import (
    AccountInfo,
    AuthResponse,
    RefreshTokenResponse,
    RegisterCommand,
)

__all__ = [
    # Use Cases
    "RegisterUseCase",
    "LoginUseCase",
    "RefreshTokenUseCase",
    "RevokeTokenUseCase",
    # DTOs - Commands
    "RegisterCommand",
    # DTOs - Responses
    "AuthResponse",
    "RefreshTokenResponse",
    # DTOs - Nested Models
    "AccountInfo",
]
