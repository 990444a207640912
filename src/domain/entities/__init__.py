"""
Credential Domain Entities

Account and its embedded session records.
"""

from .enums import SessionEviction
from .session_record import SessionRecord
from .account import MAX_TEXT_LENGTH, Account, is_storable_text, normalize_email

__all__ = [
    # Enums
    "SessionEviction",
    # Entities
    "Account",
    "SessionRecord",
    # Helpers
    "MAX_TEXT_LENGTH",
    "is_storable_text",
    "normalize_email",
]
