import datetime as _dt

import pytest

from common.datetime import parse_iso8601, require_iso8601


@pytest.mark.parametrize(
    "s,expected",
    [
        ("2025-08-27T12:00:00Z", _dt.datetime(2025, 8, 27, 12, 0, 0, tzinfo=_dt.timezone.utc)),
        ("2025-08-27T12:00:00+00:00", _dt.datetime(2025, 8, 27, 12, 0, 0, tzinfo=_dt.timezone.utc)),
        ("2025-08-27T07:00:00-05:00", _dt.datetime(2025, 8, 27, 12, 0, 0, tzinfo=_dt.timezone.utc)),
        ("2025-08-27T12:00:00.123456Z", _dt.datetime(2025, 8, 27, 12, 0, 0, 123456, tzinfo=_dt.timezone.utc)),
        ("2025-08-27", _dt.datetime(2025, 8, 27, tzinfo=_dt.timezone.utc)),
    ],
)
def test_parse_iso8601(s, expected):
    assert parse_iso8601(s) == expected


def test_parse_aware_datetime_passthrough():
    dt = _dt.datetime(2025, 1, 1, 0, 0, tzinfo=_dt.timezone.utc)
    assert parse_iso8601(dt) == dt


def test_parse_rejects_garbage():
    with pytest.raises(ValueError, match="invalid ISO-8601"):
        parse_iso8601("next week")


def test_parse_rejects_non_string():
    with pytest.raises(TypeError):
        parse_iso8601(1700000000)


def test_require_returns_value_unchanged():
    # the offset is not normalised: the API receives what the caller wrote
    assert require_iso8601("2024-03-01T09:30:00+01:00") == "2024-03-01T09:30:00+01:00"
