"""UTC datetime helpers.

All datetimes stored or compared by the app are timezone-aware UTC. Role
records written by the web client hold ISO-8601 strings instead
of Firestore timestamps, so reads go through parse_timestamp.
"""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Return the current UTC datetime with timezone info."""
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Return dt as UTC; naive values are assumed to already be UTC."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def parse_timestamp(value: object) -> datetime | None:
    """Parse a stored timestamp (datetime or ISO-8601 string, 'Z' suffix allowed).

    Returns None for missing or unparseable values.
    """
    if isinstance(value, datetime):
        return ensure_utc(value)
    if isinstance(value, str) and value:
        try:
            return ensure_utc(datetime.fromisoformat(value.replace("Z", "+00:00")))
        except ValueError:
            return None
    return None


def epoch_millis(dt: datetime) -> int:
    """Milliseconds since the Unix epoch (JavaScript Date.now() style)."""
    return int(ensure_utc(dt).timestamp() * 1000)
