"""Datetime helpers shared by the Griffin integration.

Timestamp filters are sent to the API exactly as the caller wrote them, but a
value that is not ISO-8601 at all is rejected locally instead of producing a
confusing 400 from upstream. Parsing goes through ``dateutil`` so trailing
"Z", explicit offsets and fractional seconds are all accepted.
"""
from __future__ import annotations

import datetime as _dt
from typing import Union

from dateutil.parser import isoparse as _isoparse

__all__ = ["parse_iso8601", "require_iso8601"]


def _ensure_utc(dt: _dt.datetime) -> _dt.datetime:
    if dt.tzinfo is None or dt.tzinfo.utcoffset(dt) is None:
        # naive → assume already UTC
        return dt.replace(tzinfo=_dt.timezone.utc)
    return dt.astimezone(_dt.timezone.utc)


def parse_iso8601(value: Union[str, _dt.datetime]) -> _dt.datetime:
    """Parse *value* into a timezone-aware UTC datetime."""
    if isinstance(value, _dt.datetime):
        return _ensure_utc(value)

    if not isinstance(value, str):
        raise TypeError("parse_iso8601 expects str or datetime, got " + type(value).__name__)

    try:
        dt = _isoparse(value)
    except (ValueError, OverflowError) as exc:
        raise ValueError(f"invalid ISO-8601 datetime: {value}") from exc

    return _ensure_utc(dt)


def require_iso8601(value: str) -> str:
    """Return *value* unchanged if it parses as ISO-8601, else raise ValueError."""
    parse_iso8601(value)
    return value
