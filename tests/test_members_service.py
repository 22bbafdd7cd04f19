import datetime as dt

import pytest

from domain.expiry import ExpiryCategory
from domain.models import project_payment
from services.members_service import active_members, member_cards, paginate, search_members


@pytest.fixture
def payments(sample_docs):
    return [project_payment(k, v) for k, v in sample_docs.items()]


def test_active_members_are_the_approved_ones(payments):
    assert [m.id for m in active_members(payments)] == ["p2"]


def test_search_members(payments):
    assert [m.id for m in search_members(payments, "ANA")] == ["p3"]
    assert [m.id for m in search_members(payments, "mark@")] == ["p2"]
    assert [m.id for m in search_members(payments, "0917123")] == ["p1"]
    assert len(search_members(payments, "")) == 3
    assert search_members(payments, "nobody") == []


def test_paginate_slices_and_clamps():
    items = list(range(23))
    first = paginate(items, 1, 10)
    assert first.items == list(range(10))
    assert first.total_pages == 3 and first.total_items == 23
    assert not first.has_prev and first.has_next

    last = paginate(items, 3, 10)
    assert last.items == [20, 21, 22]
    assert last.has_prev and not last.has_next

    assert paginate(items, 99, 10).page == 3
    assert paginate(items, 0, 10).page == 1


def test_paginate_empty_list_has_one_page():
    sl = paginate([], 1)
    assert sl.items == [] and sl.total_pages == 1
    assert not sl.has_prev and not sl.has_next


def test_member_cards_flag_memberships_about_to_expire(payments, now):
    soon = payments[1].with_changes(expires_at=(now + dt.timedelta(days=3)).isoformat())
    later = payments[1].with_changes(id="p9", expires_at=(now + dt.timedelta(days=60)).isoformat())
    unknown = payments[1].with_changes(id="p10", expires_at=None)

    cards = member_cards([soon, later, unknown], now)
    assert [c.expiry.category for c in cards] == [
        ExpiryCategory.EXPIRING_SOON, ExpiryCategory.ACTIVE, ExpiryCategory.UNKNOWN,
    ]
    assert [c.shows_alert for c in cards] == [True, False, False]
