import datetime as dt
from types import SimpleNamespace

import numpy as np
import pandas as pd
import pytest

from domain.timestamps import (
    UTC,
    TimestampShape,
    classify,
    format_date,
    format_month_day,
    to_instant,
    to_store_value,
)

JAN_5 = dt.datetime(2025, 1, 5, 7, 4, tzinfo=UTC)


@pytest.mark.parametrize("value", [None, "", "   ", float("nan"), pd.NaT, np.datetime64("NaT")])
def test_absent_values_are_unknown(value):
    assert classify(value) is TimestampShape.ABSENT
    assert to_instant(value) is None


def test_classify_shapes():
    assert classify(pd.Timestamp("2025-01-05")) is TimestampShape.STORE
    assert classify(JAN_5) is TimestampShape.NATIVE
    assert classify(dt.date(2025, 1, 5)) is TimestampShape.NATIVE
    assert classify({"seconds": 10}) is TimestampShape.SECONDS
    assert classify(SimpleNamespace(seconds=10, nanoseconds=0)) is TimestampShape.SECONDS
    assert classify("2025-01-05") is TimestampShape.PRIMITIVE
    assert classify(1736060640000) is TimestampShape.PRIMITIVE


def test_store_timestamp_naive_is_taken_as_utc():
    assert to_instant(pd.Timestamp("2025-01-05 07:04")) == JAN_5


def test_store_timestamp_with_zone_is_converted():
    ts = pd.Timestamp("2025-01-05 15:04", tz="Asia/Manila")
    assert to_instant(ts) == JAN_5


def test_native_datetime_and_date():
    assert to_instant(dt.datetime(2025, 1, 5, 7, 4)) == JAN_5
    assert to_instant(dt.date(2025, 1, 5)) == dt.datetime(2025, 1, 5, tzinfo=UTC)


def test_seconds_object():
    secs = int(JAN_5.timestamp())
    assert to_instant({"seconds": secs, "nanoseconds": 500_000_000}) == JAN_5 + dt.timedelta(milliseconds=500)
    assert to_instant({"_seconds": secs, "_nanoseconds": 0}) == JAN_5


def test_zero_seconds_is_the_epoch_not_absent():
    assert to_instant({"seconds": 0}) == dt.datetime(1970, 1, 1, tzinfo=UTC)


def test_primitives():
    assert to_instant("2025-01-05T07:04:00Z") == JAN_5
    assert to_instant("2025-01-05T15:04:00+08:00") == JAN_5
    assert to_instant(int(JAN_5.timestamp() * 1000)) == JAN_5


@pytest.mark.parametrize("value", ["not a date", {"foo": 1}, ["2025"], True, {"seconds": "abc"}])
def test_unparsable_values_are_unknown(value):
    assert to_instant(value) is None


def test_to_instant_is_always_utc_aware():
    for value in (JAN_5, pd.Timestamp("2025-01-05"), "2025-01-05", {"seconds": 1}, 1000):
        instant = to_instant(value)
        assert instant.tzinfo is not None
        assert instant.utcoffset() == dt.timedelta(0)


def test_store_value_round_trips_through_to_instant():
    text = to_store_value(JAN_5)
    assert text == "2025-01-05T07:04:00+00:00"
    assert to_instant(text) == JAN_5


def test_format_date_in_display_zone():
    assert format_date(JAN_5, tz="Asia/Manila") == "Jan 5, 2025"
    assert format_date(JAN_5, with_time=True, tz="Asia/Manila") == "Jan 5, 2025, 03:04 PM"
    # crosses midnight backwards in UTC-5
    assert format_date(dt.datetime(2025, 1, 5, 2, 0, tzinfo=UTC), tz="America/New_York") == "Jan 4, 2025"


def test_format_date_unknown():
    assert format_date(None) == "N/A"
    assert format_date("garbage", with_time=True) == "N/A"


def test_format_month_day():
    assert format_month_day(JAN_5, tz="UTC") == "Jan 5"
    assert format_month_day(None) == "N/A"


@pytest.mark.parametrize(
    "value, tz",
    [
        ({"seconds": 253402297199}, "Asia/Manila"),  # 9999-12-31T23:59:59Z
        (dt.datetime(9999, 12, 31, 23, tzinfo=UTC), "Asia/Manila"),
        (dt.datetime(1, 1, 1, tzinfo=UTC), "America/New_York"),
    ],
)
def test_instants_past_the_calendar_edge_in_display_zone_format_as_unknown(value, tz):
    assert to_instant(value) is not None
    assert format_date(value, tz=tz) == "N/A"
    assert format_date(value, with_time=True, tz=tz) == "N/A"
    assert format_month_day(value, tz=tz) == "N/A"
