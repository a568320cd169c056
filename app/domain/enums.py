"""Domain enumerations for the asset audit application.

Enums represent fixed sets of domain values (e.g. audit status).
"""

from enum import Enum


class AuditStatus(str, Enum):
    """Audit outcome.

    Computed once at creation from location id equality. Only MISMATCH
    may later transition to RESOLVED; MATCH is terminal immediately.
    """

    MATCH = "match"
    MISMATCH = "mismatch"
    RESOLVED = "resolved"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid status values as strings.

        Returns:
            List of enum value strings (e.g. for validation or serialization).
        """
        return [status.value for status in cls]

    @classmethod
    def for_locations(
        cls, expected_location_id: int | None, actual_location_id: int | None
    ) -> "AuditStatus":
        """Return MATCH when both ids are equal, else MISMATCH (one side None counts as unequal)."""
        if expected_location_id == actual_location_id:
            return cls.MATCH
        return cls.MISMATCH
