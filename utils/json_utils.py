# utils/json_utils.py
import datetime
import pandas as pd
import decimal
import numpy as np


def to_jsonable(value):
    """Convert common non-JSON-serializable types to safe JSON values."""
    if isinstance(value, pd.Timestamp):
        ts = value.tz_localize("UTC") if value.tzinfo is None else value.tz_convert("UTC")
        return ts.isoformat()
    if isinstance(value, datetime.datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=datetime.timezone.utc)
        return value.astimezone(datetime.timezone.utc).isoformat()
    if isinstance(value, datetime.date):
        return value.isoformat()
    if isinstance(value, decimal.Decimal):
        return float(value)
    if isinstance(value, (np.integer, np.floating)):
        return value.item()
    return value


def json_default(value):
    """`default=` hook for json.dumps; raises for anything to_jsonable can't convert."""
    out = to_jsonable(value)
    if out is value:
        raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")
    return out
