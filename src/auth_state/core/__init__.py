"""Core state machine, operations and interfaces for authentication state"""

from .context import AuthContext, create_auth_context, create_identity_provider
from .errors import (
    AuthError,
    IdentityProviderError,
    InvalidCredentialsError,
    SessionNotFoundError,
    SignUpFailedError,
)
from .identity_provider import IIdentityProvider, SignUpResult
from .init_guard import InitializationGuard
from .operations import AuthOperations
from .session_probe import SessionProbe
from .state import (
    AuthState,
    EventType,
    Initialize,
    SignedIn,
    SignedOut,
    TransitionEvent,
    apply,
)
from .store import AuthStore
from .user_context import UserContext

__all__ = [
    "AuthContext",
    "AuthError",
    "AuthOperations",
    "AuthState",
    "AuthStore",
    "EventType",
    "IIdentityProvider",
    "IdentityProviderError",
    "Initialize",
    "InitializationGuard",
    "InvalidCredentialsError",
    "SessionNotFoundError",
    "SessionProbe",
    "SignUpFailedError",
    "SignUpResult",
    "SignedIn",
    "SignedOut",
    "TransitionEvent",
    "UserContext",
    "apply",
    "create_auth_context",
    "create_identity_provider",
]
