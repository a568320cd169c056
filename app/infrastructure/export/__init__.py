"""Export: spreadsheet rendering of audit records."""

from app.infrastructure.export.audit_workbook import (
    ADMIN_SHEET_TITLE,
    USER_SHEET_TITLE,
    XLSX_MEDIA_TYPE,
    audit_export_columns,
    build_audit_workbook,
)

__all__ = [
    "ADMIN_SHEET_TITLE",
    "USER_SHEET_TITLE",
    "XLSX_MEDIA_TYPE",
    "audit_export_columns",
    "build_audit_workbook",
]
