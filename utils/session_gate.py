# utils/session_gate.py
from __future__ import annotations

from typing import Callable, Optional

from services.auth_service import AdminSession, EnvAuthProvider

CHECKING = "checking"
AUTHENTICATED = "authenticated"
UNAUTHENTICATED = "unauthenticated"


class SessionGate:
    """
    Authenticated / not-authenticated state for one browser session.

    Starts in `checking` until the provider reports for the first time, then
    follows every notification directly. Holds exactly one subscription,
    released by close().
    """

    def __init__(self, provider: EnvAuthProvider):
        self.provider = provider
        self._state = CHECKING
        self._session: Optional[AdminSession] = None
        self._unsubscribe: Optional[Callable[[], None]] = None
        self._unsubscribe = provider.subscribe(self._on_change)

    def _on_change(self, session: Optional[AdminSession]) -> None:
        self._session = session
        self._state = AUTHENTICATED if session is not None else UNAUTHENTICATED

    @property
    def state(self) -> str:
        return self._state

    @property
    def session(self) -> Optional[AdminSession]:
        return self._session

    @property
    def is_authenticated(self) -> bool:
        return self._state == AUTHENTICATED

    @property
    def closed(self) -> bool:
        return self._unsubscribe is None

    def close(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def __enter__(self) -> "SessionGate":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


def gate_for(state, key: str, make_provider: Callable[[], EnvAuthProvider]) -> SessionGate:
    """The gate stored under `key`, replacing a missing or closed one."""
    gate = state.get(key)
    if gate is None or gate.closed:
        gate = SessionGate(make_provider())
        state[key] = gate
    return gate


def end_gate(state, key: str) -> None:
    """Close and forget the gate under `key` (logout / session teardown)."""
    gate = state.pop(key, None)
    if gate is not None:
        gate.close()
