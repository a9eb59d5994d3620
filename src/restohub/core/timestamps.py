"""
UTC timestamp helpers (stdlib-only).

Audit filtering compares ``ts`` strings lexicographically, which only works
if every timestamp the hub writes has the same shape. ``utc_now_iso()`` is
the one place that shape is decided: ``YYYY-MM-DDTHH:MM:SS.mmmZ``.
"""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(UTC)


def to_iso8601(dt: datetime) -> str:
    """Render a datetime as UTC ISO-8601 with milliseconds and ``Z``.

    Naive datetimes are taken to be UTC already.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    dt = dt.astimezone(UTC)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"


def utc_now_iso() -> str:
    """Current time in the canonical string shape."""
    return to_iso8601(utc_now())


def parse_iso8601(value: str) -> datetime:
    """Parse an ISO-8601 date-time with an explicit offset or trailing ``Z``.

    Date-only and naive strings are rejected; so are instants that fall
    outside the representable range once converted to UTC.

    Raises:
        ValueError: if ``value`` is not a valid timestamp.
    """
    text = value.strip()
    if len(text) < 11 or text[10] not in "Tt":
        raise ValueError(f"not an ISO-8601 date-time: {value!r}")
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    dt = datetime.fromisoformat(text)
    if dt.tzinfo is None:
        raise ValueError(f"timestamp needs a UTC offset or Z: {value!r}")
    try:
        dt.astimezone(UTC)
    except OverflowError as e:
        raise ValueError(f"timestamp out of range: {value!r}") from e
    return dt


def normalize_iso8601(value: str) -> str:
    """Re-render any ISO-8601 string in the canonical shape."""
    return to_iso8601(parse_iso8601(value))
