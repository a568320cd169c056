"""AuditService unit tests with mocked repository and asset directory."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from app.application.dtos.asset import RemoteCallResult
from app.application.dtos.audit import AuditCreate, AuditResult, AuditSubmission
from app.application.use_cases.audits import AuditService
from app.application.use_cases.audits.audit_operations import build_audit_note
from app.domain.enums import AuditStatus
from app.domain.exceptions import (
    RemoteServiceException,
    ResourceNotFoundException,
    ValidationException,
)

CREATED = datetime(2025, 3, 1, 9, 0, 0, tzinfo=timezone.utc)


def _submission(expected: int | None = 1, actual: int = 1, notes: str | None = None) -> AuditSubmission:
    return AuditSubmission(
        asset_id=10,
        asset_tag="TAG-10",
        actual_location_id=actual,
        actual_location_name="Found Room",
        asset_name="Laptop",
        expected_location_id=expected,
        expected_location_name="Home Room" if expected is not None else None,
        notes=notes,
        user_name="amy",
    )


def _audit(
    audit_id: int,
    status: AuditStatus = AuditStatus.MISMATCH,
    resolved_at: datetime | None = None,
) -> AuditResult:
    return AuditResult(
        id=audit_id,
        asset_id=100 + audit_id,
        asset_tag=f"TAG-{audit_id}",
        asset_name=None,
        sap_asset_number=None,
        expected_location_id=1,
        expected_location_name="A",
        actual_location_id=2,
        actual_location_name="B",
        status=status,
        notes=None,
        user_name="amy",
        snipeit_audit_posted=True,
        created_at=CREATED,
        resolved_at=resolved_at,
        resolved_by="Admin" if resolved_at else None,
    )


def _created_from(data: AuditCreate) -> AuditResult:
    return AuditResult(
        id=1,
        created_at=CREATED,
        resolved_at=None,
        resolved_by=None,
        **{k: getattr(data, k) for k in AuditCreate.__dataclass_fields__},
    )


@pytest.fixture
def service_mocks():
    """AuditService over AsyncMock repo and directory."""
    repo = AsyncMock()
    repo.create = AsyncMock(side_effect=_created_from)
    directory = AsyncMock()
    directory.post_audit = AsyncMock(return_value=RemoteCallResult(success=True))
    return AuditService(audit_repo=repo, directory=directory), repo, directory


async def test_submit_equal_locations_is_match(service_mocks) -> None:
    svc, repo, directory = service_mocks
    result = await svc.submit_audit("tok", _submission(expected=1, actual=1))

    assert result.status == AuditStatus.MATCH
    assert result.snipeit_audit_posted is True
    saved: AuditCreate = repo.create.await_args.args[0]
    assert saved.status == AuditStatus.MATCH
    assert saved.snipeit_audit_posted is True


async def test_submit_different_or_missing_expected_is_mismatch(service_mocks) -> None:
    svc, _, _ = service_mocks
    assert (await svc.submit_audit("tok", _submission(1, 2))).status == AuditStatus.MISMATCH
    assert (await svc.submit_audit("tok", _submission(None, 2))).status == AuditStatus.MISMATCH


async def test_submit_posts_generated_note_when_none_given(service_mocks) -> None:
    svc, _, directory = service_mocks
    await svc.submit_audit("tok", _submission(1, 2))

    token, tag, location_id, note = directory.post_audit.await_args.args
    assert (token, tag, location_id) == ("tok", "TAG-10", 2)
    assert note == "Audit performed. Status: mismatch. Expected: Home Room, Found at: Found Room"


def test_operator_notes_are_used_verbatim() -> None:
    assert build_audit_note(_submission(notes="Moved by IT"), AuditStatus.MATCH) == "Moved by IT"


async def test_remote_failure_still_persists_locally(service_mocks) -> None:
    svc, repo, directory = service_mocks
    directory.post_audit.return_value = RemoteCallResult(success=False, error="down")

    result = await svc.submit_audit("tok", _submission(1, 1))

    assert result.snipeit_audit_posted is False
    assert repo.create.await_count == 1
    assert repo.create.await_args.args[0].snipeit_audit_posted is False


async def test_resolve_requires_ids(service_mocks) -> None:
    svc, repo, directory = service_mocks
    with pytest.raises(ValidationException) as exc_info:
        await svc.resolve_audits("tok", [])
    assert exc_info.value.message == "audit_ids array is required"
    directory.update_asset_location.assert_not_called()


async def test_resolve_patches_remote_then_marks_local(service_mocks) -> None:
    svc, repo, directory = service_mocks
    repo.get_by_id = AsyncMock(return_value=_audit(1))
    repo.mark_resolved = AsyncMock(return_value=_audit(1, AuditStatus.RESOLVED, CREATED))

    batch = await svc.resolve_audits("tok", [1])

    directory.update_asset_location.assert_awaited_once_with("tok", 101, 2)
    audit_id, _, resolved_by = repo.mark_resolved.await_args.args
    assert (audit_id, resolved_by) == (1, "Admin")
    assert batch.success is True
    assert batch.resolved == 1 and batch.failed == 0
    assert batch.results[0].remote_updated is True


async def test_resolve_uses_given_resolver(service_mocks) -> None:
    svc, repo, _ = service_mocks
    repo.get_by_id = AsyncMock(return_value=_audit(1))
    repo.mark_resolved = AsyncMock(return_value=_audit(1, AuditStatus.RESOLVED, CREATED))

    await svc.resolve_audits("tok", [1], resolved_by="Bea")
    assert repo.mark_resolved.await_args.args[2] == "Bea"


async def test_resolving_twice_reports_already_resolved(service_mocks) -> None:
    svc, repo, directory = service_mocks
    repo.get_by_id = AsyncMock(return_value=_audit(1, AuditStatus.RESOLVED, CREATED))

    batch = await svc.resolve_audits("tok", [1])

    assert batch.success is False
    assert batch.errors[0].error == "Already resolved"
    directory.update_asset_location.assert_not_called()


async def test_resolve_rejects_missing_and_match_audits(service_mocks) -> None:
    svc, repo, _ = service_mocks
    repo.get_by_id = AsyncMock(side_effect=[None, _audit(2, AuditStatus.MATCH)])

    batch = await svc.resolve_audits("tok", [1, 2])

    assert [e.error for e in batch.errors] == ["Audit not found", "Audit is not a mismatch"]


async def test_middle_failure_does_not_abort_batch(service_mocks) -> None:
    svc, repo, directory = service_mocks
    repo.get_by_id = AsyncMock(side_effect=[_audit(1), _audit(2), _audit(3)])
    repo.mark_resolved = AsyncMock(
        side_effect=lambda audit_id, *_: _audit(audit_id, AuditStatus.RESOLVED, CREATED)
    )
    directory.update_asset_location = AsyncMock(
        side_effect=[
            {"status": "success"},
            RemoteServiceException("Failed", 422, {"messages": "Invalid location"}),
            {"status": "success"},
        ]
    )

    batch = await svc.resolve_audits("tok", [1, 2, 3])

    assert batch.resolved == 2 and batch.failed == 1
    assert [r.id for r in batch.results] == [1, 3]
    assert batch.errors[0].id == 2
    assert batch.errors[0].error == "Invalid location"
    assert batch.errors[0].remote_updated is False
    assert repo.mark_resolved.await_count == 2


async def test_store_read_error_is_isolated_to_its_item(service_mocks) -> None:
    svc, repo, directory = service_mocks
    repo.get_by_id = AsyncMock(side_effect=[_audit(1), RuntimeError("db locked"), _audit(3)])
    repo.mark_resolved = AsyncMock(
        side_effect=lambda audit_id, *_: _audit(audit_id, AuditStatus.RESOLVED, CREATED)
    )

    batch = await svc.resolve_audits("tok", [1, 2, 3])

    assert batch.resolved == 2 and batch.failed == 1
    assert [r.id for r in batch.results] == [1, 3]
    assert batch.errors[0].id == 2
    assert batch.errors[0].error == "db locked"
    assert batch.errors[0].remote_updated is False
    assert directory.update_asset_location.await_count == 2


async def test_unexpected_patch_error_is_isolated_to_its_item(service_mocks) -> None:
    svc, repo, directory = service_mocks
    repo.get_by_id = AsyncMock(side_effect=[_audit(1), _audit(2), _audit(3)])
    repo.mark_resolved = AsyncMock(
        side_effect=lambda audit_id, *_: _audit(audit_id, AuditStatus.RESOLVED, CREATED)
    )
    directory.update_asset_location = AsyncMock(
        side_effect=[{"status": "success"}, ValueError("bad json"), {"status": "success"}]
    )

    batch = await svc.resolve_audits("tok", [1, 2, 3])

    assert batch.resolved == 2 and batch.failed == 1
    assert [r.id for r in batch.results] == [1, 3]
    assert batch.errors[0].id == 2
    assert batch.errors[0].error == "bad json"
    assert batch.errors[0].remote_updated is False
    assert repo.mark_resolved.await_count == 2


async def test_local_failure_after_remote_patch_reports_divergence(service_mocks) -> None:
    svc, repo, _ = service_mocks
    repo.get_by_id = AsyncMock(return_value=_audit(1))
    repo.mark_resolved = AsyncMock(side_effect=RuntimeError("disk full"))

    batch = await svc.resolve_audits("tok", [1])

    assert batch.errors[0].remote_updated is True
    assert batch.errors[0].error == "disk full"


async def test_lost_race_reports_already_resolved_with_remote_updated(service_mocks) -> None:
    svc, repo, _ = service_mocks
    repo.get_by_id = AsyncMock(return_value=_audit(1))
    repo.mark_resolved = AsyncMock(return_value=None)

    batch = await svc.resolve_audits("tok", [1])

    assert batch.errors[0].error == "Already resolved"
    assert batch.errors[0].remote_updated is True


async def test_delete_missing_audit_raises(service_mocks) -> None:
    svc, repo, _ = service_mocks
    repo.delete = AsyncMock(return_value=False)
    with pytest.raises(ResourceNotFoundException):
        await svc.delete_audit(99)
