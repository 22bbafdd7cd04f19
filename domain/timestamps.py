# domain/timestamps.py
"""
Normalize the timestamp-like values found in payment documents.

Documents written by different clients carry createdAt / expiresAt in several
shapes: pandas Timestamps (DataFrame read path), plain datetimes, Firestore
style {"seconds": ..., "nanoseconds": ...} objects, ISO strings or epoch
milliseconds. Everything funnels through to_instant(), which returns a
tz-aware UTC datetime or None when the value is missing or unparsable.
"""
from __future__ import annotations

import math
import datetime as dt
from enum import Enum
from collections.abc import Mapping
from typing import Any, Optional, Tuple
from zoneinfo import ZoneInfo

import numpy as np
import pandas as pd

UTC = dt.timezone.utc
DISPLAY_TZ = "Asia/Manila"
UNKNOWN_LABEL = "N/A"

_EPOCH = dt.datetime(1970, 1, 1, tzinfo=UTC)


class TimestampShape(Enum):
    ABSENT = "absent"
    STORE = "store"          # pandas.Timestamp
    NATIVE = "native"        # datetime / date
    SECONDS = "seconds"      # {"seconds": ..., "nanoseconds": ...}
    PRIMITIVE = "primitive"  # str / number / anything else, parsed generically


def _is_absent(value: Any) -> bool:
    if value is None or value is pd.NaT or value is pd.NA:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, float):
        return math.isnan(value)
    if isinstance(value, np.datetime64):
        return bool(np.isnat(value))
    return False


def _as_number(value: Any) -> Optional[float]:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float, np.integer, np.floating)):
        n = float(value)
    else:
        try:
            n = float(str(value).strip())
        except ValueError:
            return None
    return None if math.isnan(n) or math.isinf(n) else n


def _seconds_fields(value: Any) -> Optional[Tuple[float, float]]:
    """(seconds, nanoseconds) when value carries a numeric seconds field."""
    if isinstance(value, Mapping):
        for sec_key, ns_key in (("seconds", "nanoseconds"), ("_seconds", "_nanoseconds")):
            if sec_key in value:
                secs = _as_number(value.get(sec_key))
                if secs is None:
                    return None
                return secs, _as_number(value.get(ns_key)) or 0.0
        return None
    if isinstance(value, (str, bytes, int, float, dt.timedelta, pd.Timedelta)):
        return None
    secs = _as_number(getattr(value, "seconds", None))
    if secs is None:
        return None
    return secs, _as_number(getattr(value, "nanoseconds", None)) or 0.0


def classify(value: Any) -> TimestampShape:
    """Tag a raw value with the shape to_instant() will treat it as."""
    if _is_absent(value):
        return TimestampShape.ABSENT
    if isinstance(value, pd.Timestamp):
        return TimestampShape.STORE
    if isinstance(value, (dt.datetime, dt.date)):
        return TimestampShape.NATIVE
    if _seconds_fields(value) is not None:
        return TimestampShape.SECONDS
    return TimestampShape.PRIMITIVE


def _from_store(value: pd.Timestamp) -> dt.datetime:
    ts = value.tz_localize(UTC) if value.tzinfo is None else value.tz_convert(UTC)
    return ts.to_pydatetime()


def _from_native(value: dt.date) -> dt.datetime:
    if isinstance(value, dt.datetime):
        return value.replace(tzinfo=UTC) if value.tzinfo is None else value.astimezone(UTC)
    return dt.datetime(value.year, value.month, value.day, tzinfo=UTC)


def _from_seconds(value: Any) -> Optional[dt.datetime]:
    secs, nanos = _seconds_fields(value)
    try:
        return _EPOCH + dt.timedelta(seconds=secs, microseconds=nanos / 1000)
    except OverflowError:
        return None


def _from_primitive(value: Any) -> Optional[dt.datetime]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float, np.integer, np.floating)):
        parsed = pd.to_datetime(value, unit="ms", utc=True, errors="coerce")
    elif isinstance(value, (str, np.datetime64)):
        parsed = pd.to_datetime(value, utc=True, errors="coerce")
    else:
        return None
    if pd.isna(parsed):
        return None
    return parsed.to_pydatetime()


def to_instant(value: Any) -> Optional[dt.datetime]:
    """Return a tz-aware UTC datetime for value, or None when it is unknown."""
    shape = classify(value)
    if shape is TimestampShape.ABSENT:
        return None
    if shape is TimestampShape.STORE:
        return _from_store(value)
    if shape is TimestampShape.NATIVE:
        return _from_native(value)
    if shape is TimestampShape.SECONDS:
        return _from_seconds(value)
    try:
        return _from_primitive(value)
    except (ValueError, TypeError, OverflowError):
        return None


def now_utc() -> dt.datetime:
    return dt.datetime.now(tz=UTC)


def to_store_value(instant: dt.datetime) -> str:
    """ISO-8601 text (UTC offset included) written into documents."""
    return _from_native(instant).isoformat()


def _local(value: Any, tz: str) -> Optional[dt.datetime]:
    instant = to_instant(value)
    if instant is None:
        return None
    try:
        return instant.astimezone(ZoneInfo(tz))
    except (OverflowError, ValueError):
        return None


def format_date(value: Any, *, with_time: bool = False, tz: str = DISPLAY_TZ) -> str:
    """en-US style date ("Jan 5, 2025"), optionally with "03:04 PM"; N/A if unknown."""
    local = _local(value, tz)
    if local is None:
        return UNKNOWN_LABEL
    text = f"{local:%b} {local.day}, {local.year}"
    if with_time:
        text += f", {local:%I:%M %p}"
    return text


def format_month_day(value: Any, tz: str = DISPLAY_TZ) -> str:
    local = _local(value, tz)
    if local is None:
        return UNKNOWN_LABEL
    return f"{local:%b} {local.day}"
