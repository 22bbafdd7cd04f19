# utils/session_cache.py
"""
Per-session page state: which page is mounted, the payments list it fetched,
and a fetch generation so a stale fetch result is dropped instead of applied.
"""
import logging
from typing import Callable, List, Optional

import streamlit as st

from domain.models import Payment

log = logging.getLogger(__name__)

_ACTIVE = "_active_page"
_GEN = "_fetch_gen"
_CACHE = "payments_cache"


def _state(state=None):
    return st.session_state if state is None else state


def mount_page(page: str, state=None) -> bool:
    """Mark `page` as mounted; True when it was not the page rendered last time."""
    s = _state(state)
    if s.get(_ACTIVE) == page:
        return False
    s[_ACTIVE] = page
    drop_payments(page, state=s)
    return True


def begin_fetch(page: str, state=None) -> int:
    s = _state(state)
    gens = s.setdefault(_GEN, {})
    gens[page] = gens.get(page, 0) + 1
    return gens[page]


def accept_fetch(page: str, token: int, payments: List[Payment], state=None) -> bool:
    """Store a fetch result only if `page` is still mounted and no newer fetch started."""
    s = _state(state)
    if s.get(_ACTIVE) != page or (s.get(_GEN) or {}).get(page) != token:
        log.debug("Discarding stale fetch for %s (token %s)", page, token)
        return False
    put_payments(page, payments, state=s)
    return True


def put_payments(page: str, payments: List[Payment], state=None):
    _state(state).setdefault(_CACHE, {})[page] = list(payments)


def get_payments(page: str, state=None) -> Optional[List[Payment]]:
    return (_state(state).get(_CACHE) or {}).get(page)


def drop_payments(page: str, state=None):
    (_state(state).get(_CACHE) or {}).pop(page, None)


def ensure_payments(page: str, fetch: Callable[[], List[Payment]], refresh: bool = False, state=None) -> List[Payment]:
    """Cached list for `page`, fetching once per mount (or on refresh)."""
    if refresh:
        drop_payments(page, state=state)
    cached = get_payments(page, state=state)
    if cached is not None:
        return cached
    token = begin_fetch(page, state=state)
    payments = fetch()
    if not accept_fetch(page, token, payments, state=state):
        return get_payments(page, state=state) or []
    return payments
