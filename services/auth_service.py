# services/auth_service.py
"""
Staff sign-in backed by credentials from the environment.

The provider owns the "who is signed in" value for one browser session and
notifies subscribers on every change. Subscribers are called once right away
with the current value (AdminSession or None).
"""
from __future__ import annotations

import datetime
import logging
import secrets
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

log = logging.getLogger(__name__)

Listener = Callable[[Optional["AdminSession"]], None]


@dataclass(frozen=True)
class AdminSession:
    email: str
    name: str
    signed_in_at: datetime.datetime


def build_directory(email: str, password: str, name: str = "") -> Dict[str, Dict[str, str]]:
    """Credential directory keyed by lower-cased email."""
    e = (email or "").strip().lower()
    if not e or not password:
        raise RuntimeError("Admin email and password must both be configured")
    return {e: {"name": (name or e).strip(), "password": password}}


class EnvAuthProvider:
    def __init__(self, directory: Dict[str, Dict[str, str]]):
        self._directory = directory
        self._session: Optional[AdminSession] = None
        self._listeners: List[Listener] = []

    @property
    def current_session(self) -> Optional[AdminSession]:
        return self._session

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self._session)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)
        listener(self._session)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def sign_in(self, email: str, password: str) -> Tuple[bool, str]:
        e = (email or "").strip().lower()
        p = password or ""
        if not e or not p:
            return False, "Please enter your email and password."
        rec = self._directory.get(e)
        if not rec or not secrets.compare_digest(p.encode("utf-8"), rec["password"].encode("utf-8")):
            log.warning("Failed sign-in for %s", e)
            return False, "Invalid email or password."

        self._session = AdminSession(
            email=e,
            name=rec.get("name") or e,
            signed_in_at=datetime.datetime.now(datetime.timezone.utc),
        )
        log.info("Signed in: %s", e)
        self._notify()
        return True, "Signed in."

    def sign_out(self) -> Tuple[bool, str]:
        who = self._session.email if self._session else None
        self._session = None
        self._notify()
        log.info("Signed out: %s", who)
        return True, "Signed out."
