"""Sign-in, sign-up and sign-out operations.

Each operation makes one identity provider call and maps the outcome onto a
store transition. Operations are not serialized: if two overlap, their
transitions are applied in the order the provider calls complete, so the
last one to finish determines the final state.
"""

import asyncio
import logging
from typing import Optional

from .errors import InvalidCredentialsError, SignUpFailedError
from .identity_provider import IIdentityProvider
from .state import SignedIn, SignedOut
from .store import AuthStore

logger = logging.getLogger(__name__)

AUTHENTICATED_FLAG = "authenticated"


class AuthOperations:
    """
    Operation gateway between consumers and the identity provider.

    Only credential and sign-up failures reach the caller, always with a
    generic message. Everything else is logged and absorbed.
    """

    def __init__(
        self,
        provider: IIdentityProvider,
        store: AuthStore,
        flag_store=None,
        flag_key_prefix: str = "auth_state",
    ):
        """
        Args:
            provider: Identity provider implementation (IIdentityProvider)
            store: State store receiving transitions
            flag_store: Best-effort key/value store with set(key, value) -> bool
                (optional; no flag is written without it)
            flag_key_prefix: Namespace for the persisted flag key
        """
        self.provider = provider
        self.store = store
        self.flag_store = flag_store
        self.flag_key = f"{flag_key_prefix}:{AUTHENTICATED_FLAG}"

    async def sign_in(self, email: str, password: str) -> None:
        """
        Sign in with email and password.

        Raises:
            InvalidCredentialsError: If the provider rejects the sign-in
        """
        try:
            user = await self.provider.sign_in(email, password)
        except Exception as e:
            logger.warning(f"Sign-in rejected by {self.provider.get_provider_name()}: {e}")
            raise InvalidCredentialsError() from None

        self.store.dispatch(SignedIn(user))
        logger.info(f"User {user.user_id} signed in")

        await self._write_flag()

    async def sign_up(self, email: str, name: str, password: str) -> None:
        """
        Register a new user and treat the new identity as signed in.

        Raises:
            SignUpFailedError: If the provider rejects the registration
        """
        try:
            result = await self.provider.sign_up(
                username=email,
                password=password,
                attributes={"email": email, "name": name},
            )
        except Exception as e:
            logger.error(f"Error signing up: {e}")
            raise SignUpFailedError() from None

        self.store.dispatch(SignedIn(result.user))
        logger.info(f"User {result.user.user_id} signed up")

    async def sign_out(self) -> None:
        """
        Sign out. Never raises.

        The local state always moves to signed-out, even if the provider
        call fails.
        """
        try:
            await self.provider.sign_out()
        except Exception as e:
            logger.warning(f"Error signing out: {e}")

        self.store.dispatch(SignedOut())
        logger.info("User signed out")

    async def _write_flag(self) -> Optional[bool]:
        if self.flag_store is None:
            return None

        try:
            # Blocking client: keep the write off the event loop
            written = await asyncio.to_thread(self.flag_store.set, self.flag_key, "true")
        except Exception as e:
            logger.warning(f"Failed to persist {self.flag_key}: {e}")
            return False

        if not written:
            logger.warning(f"Failed to persist {self.flag_key}: store unavailable")
        return written
