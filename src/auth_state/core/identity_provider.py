"""Identity provider interface for pluggable auth backends"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict

from .user_context import UserContext


@dataclass(frozen=True)
class SignUpResult:
    """Outcome of a successful registration."""

    user: UserContext


class IIdentityProvider(ABC):
    """
    Interface for identity providers.

    Implementations must:
    1. Treat each call as a single attempt (no internal retry)
    2. Return a UserContext on success
    3. Raise IdentityProviderError (or a subclass) on any failure
    """

    @abstractmethod
    async def current_session(self) -> UserContext:
        """
        Resolve the user of the currently valid session.

        Returns:
            UserContext for the session owner

        Raises:
            SessionNotFoundError: If there is no valid session
            IdentityProviderError: If the provider could not be reached
        """
        pass

    @abstractmethod
    async def sign_in(self, email: str, password: str) -> UserContext:
        """
        Create a session for the given credentials.

        Raises:
            IdentityProviderError: If the credentials are rejected or the call fails
        """
        pass

    @abstractmethod
    async def sign_up(
        self, username: str, password: str, attributes: Dict[str, Any]
    ) -> SignUpResult:
        """
        Register a new identity.

        Args:
            username: Login name (the email address)
            password: Plain-text password, sent only to the provider
            attributes: Profile attributes ({"email": ..., "name": ...})

        Raises:
            IdentityProviderError: On validation failure or duplicate user
        """
        pass

    @abstractmethod
    async def sign_out(self) -> None:
        """End the current session."""
        pass

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return the name of this identity provider"""
        pass

    async def close(self) -> None:
        """Release provider resources (connections, clients)."""
        return None
