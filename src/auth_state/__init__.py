"""fm-auth-state: client-side authentication state holder"""

from .core import (
    AuthContext,
    AuthState,
    InvalidCredentialsError,
    SignUpFailedError,
    UserContext,
    create_auth_context,
)

__version__ = "1.0.0"

__all__ = [
    "AuthContext",
    "AuthState",
    "InvalidCredentialsError",
    "SignUpFailedError",
    "UserContext",
    "create_auth_context",
]
