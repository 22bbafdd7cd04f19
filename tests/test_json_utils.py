import datetime as dt
import json
from decimal import Decimal

import numpy as np
import pandas as pd
import pytest

from utils.json_utils import json_default, to_jsonable


def test_to_jsonable_converts_known_types():
    assert to_jsonable(pd.Timestamp("2025-01-05 07:04")) == "2025-01-05T07:04:00+00:00"
    assert to_jsonable(dt.datetime(2025, 1, 5, 7, 4)) == "2025-01-05T07:04:00+00:00"
    assert to_jsonable(dt.date(2025, 1, 5)) == "2025-01-05"
    assert to_jsonable(Decimal("1.5")) == 1.5
    assert to_jsonable(np.int64(3)) == 3
    assert to_jsonable("plain") == "plain"


def test_json_default_in_dumps():
    out = json.dumps({"n": np.int32(4), "when": dt.date(2025, 1, 5)}, default=json_default)
    assert json.loads(out) == {"n": 4, "when": "2025-01-05"}


def test_json_default_rejects_unknown_objects():
    with pytest.raises(TypeError):
        json.dumps({"x": object()}, default=json_default)
