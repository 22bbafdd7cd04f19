from utils.session_cache import (
    accept_fetch,
    begin_fetch,
    drop_payments,
    ensure_payments,
    get_payments,
    mount_page,
    put_payments,
)


def test_mount_page_reports_new_mounts_and_drops_that_pages_cache():
    state = {}
    assert mount_page("payments", state=state)
    put_payments("payments", ["x"], state=state)
    assert not mount_page("payments", state=state)
    assert get_payments("payments", state=state) == ["x"]

    assert mount_page("members", state=state)
    assert mount_page("payments", state=state)
    assert get_payments("payments", state=state) is None


def test_result_for_unmounted_page_is_discarded():
    state = {}
    mount_page("payments", state=state)
    token = begin_fetch("payments", state=state)
    mount_page("members", state=state)
    assert not accept_fetch("payments", token, ["late"], state=state)
    assert get_payments("payments", state=state) is None


def test_superseded_fetch_is_discarded():
    state = {}
    mount_page("payments", state=state)
    old = begin_fetch("payments", state=state)
    new = begin_fetch("payments", state=state)
    assert accept_fetch("payments", new, ["new"], state=state)
    assert not accept_fetch("payments", old, ["old"], state=state)
    assert get_payments("payments", state=state) == ["new"]


def test_ensure_payments_fetches_once_per_mount():
    state = {}
    calls = []

    def fetch():
        calls.append(1)
        return [len(calls)]

    mount_page("analytics", state=state)
    assert ensure_payments("analytics", fetch, state=state) == [1]
    assert ensure_payments("analytics", fetch, state=state) == [1]
    assert ensure_payments("analytics", fetch, refresh=True, state=state) == [2]
    assert len(calls) == 2

    drop_payments("analytics", state=state)
    assert ensure_payments("analytics", fetch, state=state) == [3]


def test_refresh_drops_cached_list_before_fetching():
    state = {}
    mount_page("payments", state=state)
    put_payments("payments", ["old"], state=state)

    def fetch():
        mount_page("members", state=state)
        return ["new"]

    assert ensure_payments("payments", fetch, refresh=True, state=state) == []
    assert get_payments("payments", state=state) is None
