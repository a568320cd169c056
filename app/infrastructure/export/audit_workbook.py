"""Excel export of audit records (openpyxl).

Admin export lists every column including who audited and whether the
audit reached Snipe-IT; the per-user export omits those two.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from io import BytesIO
from typing import Any

from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from app.application.dtos.audit import AuditResult

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

ADMIN_SHEET_TITLE = "Audits"
USER_SHEET_TITLE = "My Audits"

_MAX_COLUMN_WIDTH = 50


def _date_cell(audit: AuditResult) -> Any:
    # Excel cells cannot hold tz-aware datetimes.
    return audit.created_at.replace(tzinfo=None) if audit.created_at else None


_ADMIN_COLUMNS: tuple[tuple[str, Callable[[AuditResult], Any]], ...] = (
    ("ID", lambda a: a.id),
    ("Asset Tag", lambda a: a.asset_tag),
    ("Asset Name", lambda a: a.asset_name),
    ("SAP Asset Number", lambda a: a.sap_asset_number or ""),
    ("Expected Location", lambda a: a.expected_location_name),
    ("Actual Location", lambda a: a.actual_location_name),
    ("Status", lambda a: a.status.value.upper()),
    ("Notes", lambda a: a.notes),
    ("Audited By", lambda a: a.user_name),
    ("Posted to Snipe-IT", lambda a: "Yes" if a.snipeit_audit_posted else "No"),
    ("Date", _date_cell),
)

_USER_ONLY_EXCLUDED = frozenset({"Audited By", "Posted to Snipe-IT"})


def _columns(include_admin_columns: bool) -> list[tuple[str, Callable[[AuditResult], Any]]]:
    return [
        (name, getter)
        for name, getter in _ADMIN_COLUMNS
        if include_admin_columns or name not in _USER_ONLY_EXCLUDED
    ]


def audit_export_columns(include_admin_columns: bool) -> list[str]:
    """Return the header row for the chosen export flavour."""
    return [name for name, _ in _columns(include_admin_columns)]


def build_audit_workbook(
    audits: Iterable[AuditResult],
    *,
    sheet_title: str = ADMIN_SHEET_TITLE,
    include_admin_columns: bool = True,
) -> bytes:
    """Render audits into an .xlsx file and return its bytes.

    Args:
        audits: Records in display order.
        sheet_title: Worksheet name.
        include_admin_columns: Include "Audited By" and "Posted to Snipe-IT".

    Returns:
        Workbook bytes (XLSX_MEDIA_TYPE).
    """
    columns = _columns(include_admin_columns)
    wb = Workbook()
    ws = wb.active
    ws.title = sheet_title

    ws.append([name for name, _ in columns])
    for cell in ws[1]:
        cell.font = Font(bold=True)
    ws.freeze_panes = "A2"

    widths = [len(name) for name, _ in columns]
    for audit in audits:
        row = [getter(audit) for _, getter in columns]
        ws.append(row)
        for idx, value in enumerate(row):
            if value is not None:
                widths[idx] = max(widths[idx], len(str(value)))

    for idx, width in enumerate(widths, start=1):
        ws.column_dimensions[get_column_letter(idx)].width = min(width + 2, _MAX_COLUMN_WIDTH)

    buffer = BytesIO()
    wb.save(buffer)
    return buffer.getvalue()
