"""Startup session check"""

import logging
from typing import Optional

from .identity_provider import IIdentityProvider
from .errors import SessionNotFoundError
from .user_context import UserContext

logger = logging.getLogger(__name__)


class SessionProbe:
    """Asks the identity provider whether a valid session already exists."""

    def __init__(self, provider: IIdentityProvider):
        self.provider = provider

    async def probe(self) -> Optional[UserContext]:
        """
        Resolve the current session owner.

        Never raises: any failure (no session, expired session, network
        error) is logged and reported as no user.

        Returns:
            UserContext if a valid session exists, otherwise None
        """
        try:
            user = await self.provider.current_session()
        except SessionNotFoundError as e:
            logger.info(f"No current session: {e}")
            return None
        except Exception as e:
            logger.warning(
                f"Session probe via {self.provider.get_provider_name()} failed: {e}"
            )
            return None

        if user is None:
            logger.warning(
                f"{self.provider.get_provider_name()} returned no user for the current session"
            )
            return None

        logger.info(f"Restored session for user {user.user_id}")
        return user
