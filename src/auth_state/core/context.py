"""Auth context: the handle consumers hold to read state and run operations"""

import asyncio
import logging
from typing import Callable, Optional

from .identity_provider import IIdentityProvider
from .init_guard import InitializationGuard
from .operations import AuthOperations
from .session_probe import SessionProbe
from .state import AuthState
from .store import AuthStore, Listener
from .user_context import UserContext

logger = logging.getLogger(__name__)


class AuthContext:
    """
    Owns one AuthStore and the components that drive it.

    Create one per application (or per user session) at the root and pass
    it to consumers. Nothing happens at construction; call start() to run
    the startup session probe and close() on teardown.

    Example:
        context = AuthContext(provider)
        await context.start()
        if not context.is_authenticated:
            await context.sign_in("a@b.com", "secret")
    """

    def __init__(
        self,
        provider: IIdentityProvider,
        flag_store=None,
        flag_key_prefix: str = "auth_state",
    ):
        self.provider = provider
        self.store = AuthStore()
        self.guard = InitializationGuard(SessionProbe(provider), self.store)
        self.operations = AuthOperations(
            provider,
            self.store,
            flag_store=flag_store,
            flag_key_prefix=flag_key_prefix,
        )

    @property
    def state(self) -> AuthState:
        return self.store.state

    @property
    def is_authenticated(self) -> bool:
        return self.store.state.is_authenticated

    @property
    def is_loading(self) -> bool:
        return self.store.state.is_loading

    @property
    def user(self) -> Optional[UserContext]:
        return self.store.state.user

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener for state changes. Returns an unsubscribe callable."""
        return self.store.subscribe(listener)

    async def start(self) -> None:
        """Run the startup session probe (once, however often this is called)."""
        await self.guard.ensure_initialized_once()

    async def connect_flag_store(self) -> bool:
        """
        Connect the flag store ahead of the first sign-in.

        The Redis client blocks while connecting, so this runs in a worker
        thread. Returns False when there is no store or it is unreachable.
        """
        flag_store = self.operations.flag_store
        if flag_store is None:
            return False

        available = await asyncio.to_thread(flag_store.is_available)
        if not available:
            logger.warning("Flag store unavailable, sign-in flag will not be persisted")
        return available

    async def wait_until_initialized(self) -> AuthState:
        """Wait for the startup probe to finish and return the resulting state."""
        await self.guard.wait()
        return self.store.state

    async def sign_in(self, email: str, password: str) -> None:
        await self.operations.sign_in(email, password)

    async def sign_up(self, email: str, name: str, password: str) -> None:
        await self.operations.sign_up(email, name, password)

    async def sign_out(self) -> None:
        await self.operations.sign_out()

    async def close(self) -> None:
        """Release provider resources."""
        await self.provider.close()
        logger.info(f"Closed auth context ({self.provider.get_provider_name()})")


def create_identity_provider(settings) -> IIdentityProvider:
    """
    Create identity provider based on configuration.

    Args:
        settings: Application settings

    Returns:
        Configured IIdentityProvider implementation

    Raises:
        ValueError: If provider is not supported
    """
    # Imported here so the core does not depend on infrastructure at import time
    from ..infrastructure import FMIdentityProvider, InMemoryIdentityProvider

    if settings.identity_provider == "fm-auth-service":
        logger.info("Using fm-auth-service identity provider")
        return FMIdentityProvider(
            service_url=settings.fm_auth_service_url,
            timeout=settings.request_timeout,
        )
    elif settings.identity_provider == "memory":
        logger.warning("Using in-memory identity provider (local development only)")
        return InMemoryIdentityProvider()
    else:
        raise ValueError(
            f"Unsupported identity provider: {settings.identity_provider}"
        )


def create_auth_context(settings) -> AuthContext:
    """Build an AuthContext from settings."""
    from ..infrastructure import get_redis_client

    provider = create_identity_provider(settings)
    flag_store = get_redis_client() if settings.persist_flag else None

    return AuthContext(
        provider,
        flag_store=flag_store,
        flag_key_prefix=settings.flag_key_prefix,
    )
