"""Authentication state and its transition function.

States:
- LOADING: before the startup session probe has reported
- AUTHENTICATED: a user is present
- UNAUTHENTICATED: probe finished (or sign-out happened) without a user

Transitions are driven only by TransitionEvent values through apply().
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Dict, Optional

from .user_context import UserContext


class EventType(Enum):
    """Transition event tags."""
    INITIALIZE = "INITIALIZE"
    SIGN_IN = "SIGN_IN"
    SIGN_OUT = "SIGN_OUT"


@dataclass(frozen=True)
class AuthState:
    """Snapshot of the authentication state."""
    is_authenticated: bool = False
    is_loading: bool = True
    user: Optional[UserContext] = None

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        return {
            "is_authenticated": self.is_authenticated,
            "is_loading": self.is_loading,
            "user": self.user.to_dict() if self.user else None,
        }


INITIAL_STATE = AuthState()


@dataclass(frozen=True)
class TransitionEvent:
    """Tagged transition event. `payload` carries the user where relevant."""
    type: EventType
    payload: Optional[UserContext] = None


def Initialize(user: Optional[UserContext] = None) -> TransitionEvent:
    return TransitionEvent(EventType.INITIALIZE, user)


def SignedIn(user: UserContext) -> TransitionEvent:
    return TransitionEvent(EventType.SIGN_IN, user)


def SignedOut() -> TransitionEvent:
    return TransitionEvent(EventType.SIGN_OUT)


def _on_initialize(state: AuthState, event: TransitionEvent) -> AuthState:
    user = event.payload
    if user is not None:
        return AuthState(is_authenticated=True, is_loading=False, user=user)
    return replace(state, is_loading=False)


def _on_sign_in(state: AuthState, event: TransitionEvent) -> AuthState:
    # A sign-in without a user would break is_authenticated == (user present)
    if event.payload is None:
        return state
    return replace(state, is_authenticated=True, user=event.payload)


def _on_sign_out(state: AuthState, event: TransitionEvent) -> AuthState:
    return replace(state, is_authenticated=False, user=None)


_HANDLERS: Dict[EventType, Callable[[AuthState, TransitionEvent], AuthState]] = {
    EventType.INITIALIZE: _on_initialize,
    EventType.SIGN_IN: _on_sign_in,
    EventType.SIGN_OUT: _on_sign_out,
}


def apply(state: AuthState, event: TransitionEvent) -> AuthState:
    """
    Compute the state that follows `event`.

    Pure function: no I/O, never raises. Unknown event tags leave the
    state unchanged.

    Args:
        state: Current state
        event: Transition event

    Returns:
        The new state (or `state` itself for a no-op)
    """
    try:
        handler = _HANDLERS.get(event.type)
    except TypeError:
        # Unhashable tag
        return state
    if handler is None:
        return state
    return handler(state, event)
