"""
JWT / bcrypt token codec

Access tokens are HS256 JWTs (python-jose). Session secrets are 64 random
bytes, URL-safe encoded, stored only as their SHA-256 hex digest.
Passwords are bcrypt hashed.
"""

import hashlib
import secrets
from datetime import UTC, datetime, timedelta
from typing import Optional

import bcrypt
from jose import JWTError, jwt

from src.app.services.token_codec import ITokenCodec
from src.domain.entities import Account

ALGORITHM = "HS256"
SESSION_SECRET_BYTES = 64
# bcrypt only looks at the first 72 bytes; newer releases reject longer input
BCRYPT_MAX_BYTES = 72


class JwtTokenCodec(ITokenCodec):
    """ITokenCodec backed by python-jose, bcrypt and hashlib"""

    def __init__(
        self,
        secret_key: str,
        issuer: str,
        audience: str,
        access_token_minutes: int = 15,
        bcrypt_rounds: int = 12,
    ):
        self.secret_key = secret_key
        self.issuer = issuer
        self.audience = audience
        self.access_token_lifetime = timedelta(minutes=access_token_minutes)
        self.bcrypt_rounds = bcrypt_rounds

    def mint_access_credential(self, account: Account) -> str:
        """
        Generate JWT access token

        Args:
            account: Account the token identifies

        Returns:
            JWT token string (HS256) with sub, email, name, iss, aud, iat, exp
        """
        now = datetime.now(UTC)
        payload = {
            "sub": str(account.id),
            "email": account.email,
            "name": account.display_name,
            "iss": self.issuer,
            "aud": self.audience,
            "iat": now,
            "exp": now + self.access_token_lifetime,
            "jti": secrets.token_hex(8),
        }
        return jwt.encode(payload, self.secret_key, algorithm=ALGORITHM)

    def verify_access_credential(self, token: str) -> Optional[dict]:
        """
        Verify and decode JWT token

        Returns:
            Decoded payload dict or None if invalid
        """
        try:
            return jwt.decode(
                token,
                self.secret_key,
                algorithms=[ALGORITHM],
                audience=self.audience,
                issuer=self.issuer,
            )
        except JWTError:
            return None

    def generate_session_secret(self) -> str:
        return secrets.token_urlsafe(SESSION_SECRET_BYTES)

    def digest(self, secret: str) -> str:
        return hashlib.sha256(secret.encode("utf-8", "surrogatepass")).hexdigest()

    def hash_password(self, raw_password: str) -> str:
        password_hash = bcrypt.hashpw(
            _password_bytes(raw_password), bcrypt.gensalt(self.bcrypt_rounds)
        )
        return password_hash.decode("utf-8")

    def verify_password(self, raw_password: str, password_digest: str) -> bool:
        try:
            return bcrypt.checkpw(
                _password_bytes(raw_password), password_digest.encode("utf-8")
            )
        except ValueError:
            # Malformed stored hash
            return False


def _password_bytes(raw_password: str) -> bytes:
    return raw_password.encode("utf-8", "surrogatepass")[:BCRYPT_MAX_BYTES]
