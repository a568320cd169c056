"""UTC helpers.

Audit rows, cache stamps and staleness cut-offs are all compared in UTC.
SQLite returns naive timestamps, so the audit repository passes them
through ensure_utc before they leave the persistence layer.
"""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Timezone-aware current time in UTC."""
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Attach UTC to naive values and convert aware ones; None passes through."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def start_of_year(moment: datetime) -> datetime:
    """Midnight UTC on January 1 of the year ``moment`` falls in (UTC)."""
    moment = ensure_utc(moment)
    return datetime(moment.year, 1, 1, tzinfo=UTC)
