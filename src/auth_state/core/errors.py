"""Error taxonomy for authentication operations.

Only InvalidCredentialsError and SignUpFailedError reach callers. Their
messages are fixed and never carry provider detail. IdentityProviderError is
raised by provider adapters and absorbed or translated by the core.
"""

INVALID_CREDENTIALS_MESSAGE = "Please check your email and password"
SIGN_UP_FAILED_MESSAGE = "There was an error signing up"


class AuthError(Exception):
    """Base class for authentication errors."""


class InvalidCredentialsError(AuthError):
    """Sign-in was rejected by the identity provider."""

    def __init__(self, message: str = INVALID_CREDENTIALS_MESSAGE):
        super().__init__(message)
        self.message = message


class SignUpFailedError(AuthError):
    """Registration was rejected by the identity provider."""

    def __init__(self, message: str = SIGN_UP_FAILED_MESSAGE):
        super().__init__(message)
        self.message = message


class IdentityProviderError(AuthError):
    """A call to the identity provider failed."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class SessionNotFoundError(IdentityProviderError):
    """No valid session exists (never signed in, expired, or revoked)."""
