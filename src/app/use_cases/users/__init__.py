"""
Account Use Cases
"""

from .get_account_use_case import GetAccountUseCase

__all__ = [
    "GetAccountUseCase",
]
