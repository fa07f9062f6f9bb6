"""UTC 시각 헬퍼.

Some drivers (SQLite) hand back naive datetimes for ``DateTime(timezone=True)``
columns; comparisons against aware ``now`` values go through ``as_utc``.
"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """naive datetime은 UTC로 간주 (Naive values are taken to be UTC)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
