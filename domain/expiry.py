# domain/expiry.py
from __future__ import annotations

import datetime as dt
from enum import Enum
from typing import Any, NamedTuple, Optional

from domain.timestamps import to_instant

ONE_DAY = dt.timedelta(days=1)


class ExpiryCategory(Enum):
    UNKNOWN = "unknown"
    EXPIRED = "expired"
    EXPIRING_SOON = "expiring-soon"
    RENEWAL_SOON = "renewal-soon"
    ACTIVE = "active"


EXPIRY_LABELS = {
    ExpiryCategory.UNKNOWN: "N/A",
    ExpiryCategory.EXPIRED: "Expired",
    ExpiryCategory.EXPIRING_SOON: "Expiring Soon",
    ExpiryCategory.RENEWAL_SOON: "Renewal Soon",
    ExpiryCategory.ACTIVE: "Active",
}

# text color, badge background
EXPIRY_COLORS = {
    ExpiryCategory.UNKNOWN: (None, None),
    ExpiryCategory.EXPIRED: ("#f87171", "rgba(127,29,29,0.2)"),
    ExpiryCategory.EXPIRING_SOON: ("#f87171", "rgba(127,29,29,0.2)"),
    ExpiryCategory.RENEWAL_SOON: ("#facc15", "rgba(113,63,18,0.2)"),
    ExpiryCategory.ACTIVE: ("#4ade80", "rgba(20,83,45,0.2)"),
}

EXPIRING_SOON_DAYS = 7
RENEWAL_SOON_DAYS = 30


class ExpiryStatus(NamedTuple):
    days: Optional[int]
    category: ExpiryCategory
    label: str
    color: Optional[str]
    background: Optional[str]

    @property
    def days_left_text(self) -> str:
        return days_left_text(self.days)


def days_until(instant: Optional[dt.datetime], now: dt.datetime) -> Optional[int]:
    """
    Whole days from now until instant, rounded up (ceil).

    Both datetimes must be tz-aware. The caller samples `now` once per render
    so every row of a page is computed against the same moment.
    """
    if instant is None:
        return None
    return -((now - instant) // ONE_DAY)


def categorize(days: Optional[int]) -> ExpiryCategory:
    if days is None:
        return ExpiryCategory.UNKNOWN
    if days < 0:
        return ExpiryCategory.EXPIRED
    if days <= EXPIRING_SOON_DAYS:
        return ExpiryCategory.EXPIRING_SOON
    if days <= RENEWAL_SOON_DAYS:
        return ExpiryCategory.RENEWAL_SOON
    return ExpiryCategory.ACTIVE


def days_left_text(days: Optional[int]) -> str:
    if days is not None and days >= 0:
        return f"{days} days left"
    return EXPIRY_LABELS[categorize(days)]


def status_for_days(days: Optional[int]) -> ExpiryStatus:
    category = categorize(days)
    color, background = EXPIRY_COLORS[category]
    return ExpiryStatus(days, category, EXPIRY_LABELS[category], color, background)


def expiry_status(value: Any, now: dt.datetime) -> ExpiryStatus:
    """Normalize a raw expiresAt value and classify it against now."""
    return status_for_days(days_until(to_instant(value), now))
