"""Audit API: submit, list, export, resolve and delete audit records."""

import re

from fastapi import APIRouter, Request
from fastapi.responses import Response

from app.api.v1.dependencies import AdminGate, ApiToken, AuditServiceDep
from app.application.dtos.audit import AuditResult, AuditSubmission, ResolveBatchResult
from app.core.limiter import limit_writes
from app.infrastructure.export import (
    ADMIN_SHEET_TITLE,
    USER_SHEET_TITLE,
    XLSX_MEDIA_TYPE,
    build_audit_workbook,
)
from app.schemas.audit import (
    AuditResponse,
    AuditSubmitRequest,
    AuditSubmitResponse,
    ResolveItemResponse,
    ResolveRequest,
    ResolveResponse,
    SuccessResponse,
)

router = APIRouter()

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def _to_responses(audits: list[AuditResult]) -> list[AuditResponse]:
    return [AuditResponse.model_validate(a) for a in audits]


def _xlsx_download(content: bytes, filename: str) -> Response:
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


def _to_resolve_response(batch: ResolveBatchResult) -> ResolveResponse:
    return ResolveResponse(
        success=batch.success,
        resolved=batch.resolved,
        failed=batch.failed,
        results=[ResolveItemResponse.model_validate(r) for r in batch.results],
        errors=[ResolveItemResponse.model_validate(e) for e in batch.errors],
    )


@router.post("/audit", response_model=AuditSubmitResponse)
@limit_writes
async def submit_audit(
    request: Request,
    body: AuditSubmitRequest,
    token: ApiToken,
    audit_svc: AuditServiceDep,
) -> AuditSubmitResponse:
    """Record an audit; the Snipe-IT audit post is best-effort and never blocks the save."""
    result = await audit_svc.submit_audit(
        token,
        AuditSubmission(
            asset_id=body.asset_id,
            asset_tag=body.asset_tag,
            actual_location_id=body.actual_location_id,
            actual_location_name=body.actual_location_name,
            asset_name=body.asset_name,
            sap_asset_number=body.sap_asset_number or None,
            expected_location_id=body.expected_location_id,
            expected_location_name=body.expected_location_name,
            notes=body.notes,
            user_name=body.user_name,
        ),
    )
    return AuditSubmitResponse(
        id=result.id,
        status=result.status,
        snipeit_audit_posted=result.snipeit_audit_posted,
    )


@router.get("/audits", response_model=list[AuditResponse])
async def list_audits(_admin: AdminGate, audit_svc: AuditServiceDep) -> list[AuditResponse]:
    """All audits, newest first (admin)."""
    return _to_responses(await audit_svc.list_audits())


@router.get("/audits/user/{username}", response_model=list[AuditResponse])
async def list_user_audits(username: str, audit_svc: AuditServiceDep) -> list[AuditResponse]:
    return _to_responses(await audit_svc.list_user_audits(username))


@router.get(
    "/audits/export",
    response_class=Response,
    responses={200: {"content": {XLSX_MEDIA_TYPE: {}}}},
)
async def export_audits(_admin: AdminGate, audit_svc: AuditServiceDep) -> Response:
    """Every audit as an .xlsx download (admin)."""
    audits = await audit_svc.list_audits()
    content = build_audit_workbook(
        audits, sheet_title=ADMIN_SHEET_TITLE, include_admin_columns=True
    )
    return _xlsx_download(content, "audit_report.xlsx")


@router.get(
    "/audits/export/user/{username}",
    response_class=Response,
    responses={200: {"content": {XLSX_MEDIA_TYPE: {}}}},
)
async def export_user_audits(username: str, audit_svc: AuditServiceDep) -> Response:
    """One user's audits as an .xlsx download (no auditor or Snipe-IT columns)."""
    audits = await audit_svc.list_user_audits(username)
    content = build_audit_workbook(
        audits, sheet_title=USER_SHEET_TITLE, include_admin_columns=False
    )
    safe_name = _UNSAFE_FILENAME_CHARS.sub("_", username) or "user"
    return _xlsx_download(content, f"my_audits_{safe_name}.xlsx")


@router.post("/audits/resolve", response_model=ResolveResponse)
@limit_writes
async def resolve_audits(
    request: Request,
    body: ResolveRequest,
    _admin: AdminGate,
    token: ApiToken,
    audit_svc: AuditServiceDep,
) -> ResolveResponse:
    """Push each mismatch's observed location to Snipe-IT, then mark it resolved.

    Always 200 once validation passes; per-id failures are itemized in errors.
    """
    batch = await audit_svc.resolve_audits(token, body.audit_ids, body.resolved_by)
    return _to_resolve_response(batch)


@router.delete("/audits/{audit_id}", response_model=SuccessResponse)
@limit_writes
async def delete_audit(
    request: Request,
    audit_id: int,
    _admin: AdminGate,
    audit_svc: AuditServiceDep,
) -> SuccessResponse:
    """Delete one audit record (admin). 404 when it does not exist."""
    await audit_svc.delete_audit(audit_id)
    return SuccessResponse()
