"""Observable store holding the single live AuthState.

Every dispatch applies one transition and notifies all subscribers before
returning, so a reader that runs after dispatch() never sees a stale state.
"""

import logging
from typing import Callable, List

from .state import INITIAL_STATE, AuthState, TransitionEvent, apply

logger = logging.getLogger(__name__)

Listener = Callable[[AuthState], None]


class AuthStore:
    """
    Holder of the authentication state.

    Example:
        store = AuthStore()
        unsubscribe = store.subscribe(lambda state: print(state.is_authenticated))
        store.dispatch(SignedIn(user))
        unsubscribe()
    """

    def __init__(self, initial_state: AuthState = INITIAL_STATE):
        self._state = initial_state
        self._listeners: List[Listener] = []

    @property
    def state(self) -> AuthState:
        """Current state snapshot."""
        return self._state

    def dispatch(self, event: TransitionEvent) -> AuthState:
        """
        Apply a transition and notify subscribers synchronously.

        Args:
            event: Transition event

        Returns:
            The state after the transition
        """
        previous = self._state
        self._state = apply(previous, event)

        tag = getattr(event.type, "value", event.type)
        if self._state is previous:
            logger.debug(f"Transition {tag}: no change")
        else:
            logger.debug(
                f"Transition {tag}: "
                f"authenticated={self._state.is_authenticated}, "
                f"loading={self._state.is_loading}"
            )

        self._notify(self._state)
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener called with the new state after every dispatch.

        Returns:
            Callable that removes the listener (safe to call more than once)
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, state: AuthState) -> None:
        # Copy so listeners may unsubscribe while being notified
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception(f"Auth state listener {listener!r} failed")
