"""In-memory identity provider for local development"""

import logging
import uuid
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..core.errors import IdentityProviderError, SessionNotFoundError
from ..core.identity_provider import IIdentityProvider, SignUpResult
from ..core.user_context import UserContext

logger = logging.getLogger(__name__)


@dataclass
class _Account:
    password: str
    user: UserContext


class InMemoryIdentityProvider(IIdentityProvider):
    """
    Identity provider that keeps users and the current session in process.

    Nothing is persisted: a restart forgets every account and session.
    Passwords are compared in plain text, so never use this outside
    development and tests.
    """

    def __init__(self):
        self._accounts: Dict[str, _Account] = {}
        self._session: Optional[UserContext] = None

        logger.info("Initialized InMemoryIdentityProvider")

    async def current_session(self) -> UserContext:
        if self._session is None:
            raise SessionNotFoundError("No active session")
        return self._session

    async def sign_in(self, email: str, password: str) -> UserContext:
        account = self._accounts.get(email.lower())
        if account is None or account.password != password:
            raise IdentityProviderError("Incorrect username or password", 401)

        self._session = account.user
        return account.user

    async def sign_up(
        self, username: str, password: str, attributes: Dict[str, Any]
    ) -> SignUpResult:
        key = username.lower()
        if not username or not password:
            raise IdentityProviderError("Username and password are required", 400)
        if key in self._accounts:
            raise IdentityProviderError("User already exists", 409)

        user = UserContext(
            user_id=str(uuid.uuid4()),
            email=attributes.get("email", username),
            name=attributes.get("name"),
            attributes=dict(attributes),
        )
        self._accounts[key] = _Account(password=password, user=user)
        self._session = user

        logger.debug(f"Registered in-memory user {user.user_id}")
        return SignUpResult(user=user)

    async def sign_out(self) -> None:
        self._session = None

    def get_provider_name(self) -> str:
        """Return the name of this identity provider"""
        return "memory"
