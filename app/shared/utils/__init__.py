"""UTC datetime helpers."""

from app.shared.utils.datetime import ensure_utc, start_of_year, utc_now

__all__ = ["ensure_utc", "start_of_year", "utc_now"]
