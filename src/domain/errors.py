"""
Credential Error Taxonomy

Typed failures returned (or raised) by the credential lifecycle use cases.
"""


class CredentialError(Exception):
    """Base class - every failure carries a stable code and a message"""

    code = "CREDENTIAL_ERROR"

    def __init__(self, code: str = None, message: str = ""):
        self.code = code or self.code
        self.message = message
        super().__init__(message)

    def __repr__(self):
        return f"{type(self).__name__}({self.code!r}, {self.message!r})"


class ValidationError(CredentialError):
    """Malformed input - caller fixes and retries"""

    code = "VALIDATION_ERROR"


class ConflictError(CredentialError):
    """Duplicate email"""

    code = "EMAIL_ALREADY_EXISTS"


class AuthError(CredentialError):
    """Invalid credentials or unusable session secret"""

    code = "INVALID_CREDENTIALS"


class StoreError(CredentialError):
    """Account store I/O failure - retryable"""

    code = "STORE_UNAVAILABLE"


class StaleAccountError(StoreError):
    """Account was replaced by someone else since it was read"""

    code = "STALE_ACCOUNT"
