"""Run-once guard for the startup session probe"""

import asyncio
import logging

from .session_probe import SessionProbe
from .state import Initialize
from .store import AuthStore

logger = logging.getLogger(__name__)


class InitializationGuard:
    """
    Runs the session probe at most once per guard instance.

    The latch is set before the first await, so a second call that arrives
    while the first probe is still pending sees it and returns immediately.

    Example:
        guard = InitializationGuard(probe, store)
        await asyncio.gather(guard.ensure_initialized_once(),
                             guard.ensure_initialized_once())
        # probe ran once
    """

    def __init__(self, probe: SessionProbe, store: AuthStore):
        self.probe = probe
        self.store = store
        self._started = False
        self._done = asyncio.Event()

    @property
    def initialized(self) -> bool:
        """True once Initialize has been dispatched."""
        return self._done.is_set()

    async def ensure_initialized_once(self) -> None:
        """Probe the session and dispatch Initialize, unless already started."""
        if self._started:
            logger.debug("Initialization already started, skipping")
            return

        self._started = True

        # Initialize is dispatched even if the probe is cancelled, so
        # is_loading always settles
        user = None
        try:
            user = await self.probe.probe()
        finally:
            self.store.dispatch(Initialize(user))
            self._done.set()

    async def wait(self) -> None:
        """Block until Initialize has been dispatched."""
        await self._done.wait()
