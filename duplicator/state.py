# duplicator/state.py
'''
Explicit session state for the two-screen app.
 - One enumerated value per browser session instead of loose loading/auth flags.
 - `advance` is the only way to move between states; anything not in TRANSITIONS raises InvalidTransition.
 - Logout (UNAUTHENTICATED) is reachable from every state.
'''

from __future__ import annotations

from enum import Enum

from .errors import InvalidTransition


class SessionState(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATING = "authenticating"
    READY = "ready"
    DUPLICATION_IN_FLIGHT = "duplication_in_flight"
    ERROR = "error"


TRANSITIONS = {
    SessionState.UNAUTHENTICATED: {SessionState.AUTHENTICATING},
    SessionState.AUTHENTICATING: {SessionState.AUTHENTICATING, SessionState.READY},
    SessionState.READY: {SessionState.DUPLICATION_IN_FLIGHT, SessionState.AUTHENTICATING},
    SessionState.DUPLICATION_IN_FLIGHT: {SessionState.READY, SessionState.ERROR},
    SessionState.ERROR: {SessionState.DUPLICATION_IN_FLIGHT, SessionState.READY, SessionState.AUTHENTICATING},
}


def can_advance(current: SessionState, target: SessionState) -> bool:
    if target is SessionState.UNAUTHENTICATED:
        return True
    return target in TRANSITIONS.get(current, set())


def advance(current: SessionState, target: SessionState) -> SessionState:
    if not can_advance(current, target):
        raise InvalidTransition(current, target)
    return target
