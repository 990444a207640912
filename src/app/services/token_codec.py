from abc import ABC, abstractmethod
from typing import Optional

from src.domain.entities import Account


class ITokenCodec(ABC):
    """Token and password primitives consumed by the credential use cases"""

    @abstractmethod
    def mint_access_credential(self, account: Account) -> str:
        """Short-lived signed access token for the account"""
        pass

    @abstractmethod
    def verify_access_credential(self, token: str) -> Optional[dict]:
        """Decoded claims, or None if the token is invalid or expired"""
        pass

    @abstractmethod
    def generate_session_secret(self) -> str:
        """High-entropy opaque session secret"""
        pass

    @abstractmethod
    def digest(self, secret: str) -> str:
        """Deterministic one-way digest of a session secret"""
        pass

    @abstractmethod
    def hash_password(self, raw_password: str) -> str:
        pass

    @abstractmethod
    def verify_password(self, raw_password: str, password_digest: str) -> bool:
        pass
