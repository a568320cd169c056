"""Asset staleness classification.

Turns raw Snipe-IT hardware rows into normalized AssetSummary entries and
partitions them into never-audited, not-audited-this-year and overdue
views. Pure functions; "now" is passed in so callers and tests control it.

Snipe-IT returns dates either as plain strings or as
{"datetime": ..., "formatted": ...} objects depending on endpoint and
version, and keeps the SAP reference in a free-form custom field.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import UTC, datetime
from typing import Any

from app.application.dtos.asset import AssetSnapshot, AssetSummary
from app.shared.utils.datetime import ensure_utc, start_of_year, utc_now

# Exact custom field names, in priority order.
SAP_FIELD_NAMES: tuple[str, ...] = ("SAP Asset Number / ID", "SAP Asset Number")
SAP_FIELD_MARKER = "sap"

# Non-ISO layouts Snipe-IT uses for "formatted" values.
_DATE_FORMATS: tuple[str, ...] = (
    "%Y-%m-%d %I:%M %p",
    "%Y-%m-%d %I:%M%p",
    "%a %b %d, %Y %I:%M%p",
    "%a %b %d, %Y",
    "%b %d, %Y %I:%M%p",
    "%b %d, %Y",
    "%d %b %Y",
    "%m/%d/%Y",
)


def extract_date(date_field: Any) -> str | None:
    """Return the date string carried by a Snipe-IT date field, or None.

    Strings are returned as-is; objects yield "datetime", else "formatted".
    """
    if not date_field:
        return None
    if isinstance(date_field, str):
        return date_field
    if isinstance(date_field, Mapping):
        if date_field.get("datetime"):
            return date_field["datetime"]
        if date_field.get("formatted"):
            return date_field["formatted"]
    return None


def parse_date_string(value: str) -> datetime | None:
    """Parse an ISO 8601 or Snipe-IT formatted date; naive results are taken as UTC."""
    text = value.strip()
    if not text:
        return None
    candidate = text[:-1] + "+00:00" if text.endswith("Z") else text
    try:
        return ensure_utc(datetime.fromisoformat(candidate))
    except ValueError:
        pass
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).replace(tzinfo=UTC)
        except ValueError:
            continue
    return None


def parse_date(date_field: Any) -> datetime | None:
    """Extract then parse a date field; None when absent or unparseable."""
    date_str = extract_date(date_field)
    if not date_str or not isinstance(date_str, str):
        return None
    return parse_date_string(date_str)


def _is_sap_field(field_name: str, descriptor: Any) -> bool:
    if SAP_FIELD_MARKER in field_name.lower():
        return True
    if isinstance(descriptor, Mapping):
        label = descriptor.get("field")
        if isinstance(label, str) and SAP_FIELD_MARKER in label.lower():
            return True
    return False


def _field_value(descriptor: Any) -> Any:
    if isinstance(descriptor, Mapping):
        return descriptor.get("value") or None
    return None


def resolve_sap_asset_number(custom_fields: Mapping[str, Any] | None) -> str | None:
    """Return the SAP asset number from a custom field bag, or None.

    Priority: the exact names in SAP_FIELD_NAMES (a present field wins even
    when its value is empty); then the first field, in supplied order, whose
    name or "field" label contains "sap" case-insensitively.
    """
    if not custom_fields:
        return None
    for name in SAP_FIELD_NAMES:
        descriptor = custom_fields.get(name)
        if descriptor:
            return _field_value(descriptor)
    for field_name, descriptor in custom_fields.items():
        if _is_sap_field(field_name, descriptor):
            return _field_value(descriptor)
    return None


def sap_value_matches(custom_fields: Mapping[str, Any] | None, term: str) -> bool:
    """Return True if an SAP-like custom field's value equals term (case-insensitive)."""
    if not custom_fields:
        return False
    wanted = term.lower()

    def _matches(descriptor: Any) -> bool:
        value = _field_value(descriptor)
        return isinstance(value, str) and value.lower() == wanted

    for name in SAP_FIELD_NAMES:
        descriptor = custom_fields.get(name)
        if descriptor and _matches(descriptor):
            return True
    return any(
        _is_sap_field(field_name, descriptor) and _matches(descriptor)
        for field_name, descriptor in custom_fields.items()
    )


def _nested_name(raw: Mapping[str, Any], key: str) -> Any:
    nested = raw.get(key)
    if isinstance(nested, Mapping):
        return nested.get("name") or None
    return None


def summarize_asset(raw: Mapping[str, Any], now: datetime) -> AssetSummary:
    """Normalize one raw hardware row and derive its audit flags."""
    last_audit = parse_date(raw.get("last_audit_date"))
    next_audit = parse_date(raw.get("next_audit_date"))
    year_start = start_of_year(now)
    location = raw.get("location")
    location_id = location.get("id") if isinstance(location, Mapping) else None

    return AssetSummary(
        id=raw.get("id"),
        asset_tag=raw.get("asset_tag"),
        name=raw.get("name"),
        serial=raw.get("serial"),
        model=_nested_name(raw, "model"),
        category=_nested_name(raw, "category"),
        location=_nested_name(raw, "location"),
        location_id=location_id or None,
        assigned_to=_nested_name(raw, "assigned_to"),
        status=_nested_name(raw, "status_label"),
        sap_asset_number=resolve_sap_asset_number(raw.get("custom_fields")),
        last_audit_date=extract_date(raw.get("last_audit_date")),
        next_audit_date=extract_date(raw.get("next_audit_date")),
        never_audited=not raw.get("last_audit_date"),
        not_audited_this_year=last_audit < year_start if last_audit else True,
        audit_overdue=next_audit < now if next_audit else False,
    )


def classify_assets(
    raw_assets: Iterable[Mapping[str, Any]], now: datetime | None = None
) -> AssetSnapshot:
    """Normalize all assets and partition them into staleness views.

    never_audited takes priority: not_audited_this_year only holds assets
    that were audited before but not since January 1. audit_overdue is
    filtered independently over the full list.

    Args:
        raw_assets: Hardware rows in remote order.
        now: Classification time (defaults to current UTC time).

    Returns:
        AssetSnapshot with total and the four views.
    """
    current = ensure_utc(now) if now is not None else utc_now()
    summaries = tuple(summarize_asset(raw, current) for raw in raw_assets)
    return AssetSnapshot(
        total=len(summaries),
        never_audited=tuple(a for a in summaries if a.never_audited),
        not_audited_this_year=tuple(
            a for a in summaries if not a.never_audited and a.not_audited_this_year
        ),
        audit_overdue=tuple(a for a in summaries if a.audit_overdue),
        all_assets=summaries,
    )
