# services/members_service.py
from __future__ import annotations

import math
import datetime
from dataclasses import dataclass
from typing import Iterable, List, Sequence, TypeVar

from domain.expiry import ExpiryStatus, expiry_status
from domain.models import APPROVED, Payment

T = TypeVar("T")

MEMBERS_PAGE_SIZE = 10


@dataclass
class PageSlice:
    items: list
    page: int
    total_pages: int
    total_items: int

    @property
    def has_prev(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages


@dataclass
class MemberCard:
    payment: Payment
    expiry: ExpiryStatus

    @property
    def shows_alert(self) -> bool:
        return self.expiry.days is not None and self.expiry.days <= 7


def active_members(payments: Iterable[Payment]) -> List[Payment]:
    return [p for p in payments if p.status == APPROVED]


def search_members(members: Iterable[Payment], term: str) -> List[Payment]:
    """Name / email match case-insensitively; contact number is a plain substring match."""
    raw = term or ""
    q = raw.lower()
    return [
        m for m in members
        if q in m.full_name.lower() or q in m.email.lower() or raw in m.contact_number
    ]


def paginate(items: Sequence[T], page: int, page_size: int = MEMBERS_PAGE_SIZE) -> PageSlice:
    total = len(items)
    total_pages = max(1, math.ceil(total / page_size))
    page = min(max(1, int(page or 1)), total_pages)
    start = (page - 1) * page_size
    return PageSlice(list(items[start:start + page_size]), page, total_pages, total)


def member_cards(members: Iterable[Payment], now: datetime.datetime) -> List[MemberCard]:
    return [MemberCard(m, expiry_status(m.expires_at, now)) for m in members]
