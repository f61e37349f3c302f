import re
from datetime import timedelta

from spa_auth.core.exceptions import ConfigurationError

_SECOND = 1.0
_MINUTE = 60 * _SECOND
_HOUR = 60 * _MINUTE
_DAY = 24 * _HOUR
_WEEK = 7 * _DAY
_YEAR = 365.25 * _DAY

_UNITS = {
    "ms": 0.001, "msec": 0.001, "msecs": 0.001,
    "millisecond": 0.001, "milliseconds": 0.001,
    "s": _SECOND, "sec": _SECOND, "secs": _SECOND,
    "second": _SECOND, "seconds": _SECOND,
    "m": _MINUTE, "min": _MINUTE, "mins": _MINUTE,
    "minute": _MINUTE, "minutes": _MINUTE,
    "h": _HOUR, "hr": _HOUR, "hrs": _HOUR,
    "hour": _HOUR, "hours": _HOUR,
    "d": _DAY, "day": _DAY, "days": _DAY,
    "w": _WEEK, "week": _WEEK, "weeks": _WEEK,
    "y": _YEAR, "yr": _YEAR, "yrs": _YEAR,
    "year": _YEAR, "years": _YEAR,
}

_DURATION_RE = re.compile(r"^(-?(?:\d+)?\.?\d+) *([a-z]+)?$", re.IGNORECASE)

def parse_duration(value: int | str | timedelta) -> timedelta:
    """
    Convert an activation period into a timedelta.

    Integers are seconds. Strings follow the "<number> <unit>" form used by
    JavaScript token libraries ("15m", "2 hours", "5 days"); a bare numeric
    string is read as milliseconds.
    """
    if isinstance(value, timedelta):
        return value
    if isinstance(value, bool):
        raise ConfigurationError(f"Invalid activation period: {value!r}")
    if isinstance(value, int):
        return _to_timedelta(value, value)
    if not isinstance(value, str):
        raise ConfigurationError(f"Invalid activation period: {value!r}")

    match = _DURATION_RE.match(value.strip())
    if not match:
        raise ConfigurationError(f"Invalid activation period: {value!r}")

    amount, unit = match.groups()
    factor = _UNITS.get((unit or "ms").lower())
    if factor is None:
        raise ConfigurationError(f"Unknown time unit in activation period: {value!r}")
    return _to_timedelta(float(amount) * factor, value)

def _to_timedelta(seconds: int | float, value: int | str) -> timedelta:
    try:
        return timedelta(seconds=seconds)
    except OverflowError as exc:
        raise ConfigurationError(f"Activation period out of range: {value!r}") from exc
