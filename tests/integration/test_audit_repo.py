"""Audit repository integration tests against a throwaway SQLite file."""

from datetime import datetime, timezone

from app.application.dtos.audit import AuditCreate
from app.domain.enums import AuditStatus
from app.infrastructure.persistence.repositories.audit_repo import AuditRepository


def _create(
    asset_id: int = 1,
    status: AuditStatus = AuditStatus.MISMATCH,
    user_name: str | None = "amy",
    sap: str | None = None,
) -> AuditCreate:
    return AuditCreate(
        asset_id=asset_id,
        asset_tag=f"TAG-{asset_id}",
        asset_name="Laptop",
        sap_asset_number=sap,
        expected_location_id=1,
        expected_location_name="A",
        actual_location_id=2 if status == AuditStatus.MISMATCH else 1,
        actual_location_name="B",
        status=status,
        notes=None,
        user_name=user_name,
        snipeit_audit_posted=False,
    )


async def test_create_assigns_id_and_timestamp(db_session) -> None:
    repo = AuditRepository(db_session)
    created = await repo.create(_create(sap=""))

    assert created.id >= 1
    assert created.created_at is not None
    assert created.created_at.tzinfo is not None
    assert created.status == AuditStatus.MISMATCH
    assert created.snipeit_audit_posted is False
    assert created.sap_asset_number is None
    assert created.resolved_at is None


async def test_get_by_id_missing_returns_none(db_session) -> None:
    assert await AuditRepository(db_session).get_by_id(12345) is None


async def test_lists_are_newest_first_and_filter_by_user(db_session) -> None:
    repo = AuditRepository(db_session)
    first = await repo.create(_create(asset_id=1, user_name="amy"))
    second = await repo.create(_create(asset_id=2, user_name="bob"))
    third = await repo.create(_create(asset_id=3, user_name="amy"))

    assert [a.id for a in await repo.list_all()] == [third.id, second.id, first.id]
    assert [a.id for a in await repo.list_by_user("amy")] == [third.id, first.id]
    assert await repo.list_by_user("nobody") == []


async def test_mark_resolved_is_one_shot(db_session) -> None:
    repo = AuditRepository(db_session)
    audit = await repo.create(_create())
    # Load into the session first so the update must refresh the cached row.
    await repo.get_by_id(audit.id)
    when = datetime(2025, 4, 1, 8, 0, tzinfo=timezone.utc)

    resolved = await repo.mark_resolved(audit.id, when, "Admin")
    again = await repo.mark_resolved(audit.id, when, "Someone else")

    assert resolved is not None
    assert resolved.status == AuditStatus.RESOLVED
    assert resolved.resolved_by == "Admin"
    assert resolved.resolved_at == when
    assert again is None
    assert (await repo.get_by_id(audit.id)).resolved_by == "Admin"


async def test_mark_resolved_ignores_matches(db_session) -> None:
    repo = AuditRepository(db_session)
    audit = await repo.create(_create(status=AuditStatus.MATCH))
    when = datetime(2025, 4, 1, tzinfo=timezone.utc)
    assert await repo.mark_resolved(audit.id, when, "Admin") is None


async def test_delete(db_session) -> None:
    repo = AuditRepository(db_session)
    audit = await repo.create(_create())
    assert await repo.delete(audit.id) is True
    assert await repo.delete(audit.id) is False
    assert await repo.get_by_id(audit.id) is None
