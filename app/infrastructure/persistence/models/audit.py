"""Audit ORM model. One row per performed physical audit."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from app.infrastructure.persistence.database import Base


class Audit(Base):
    """Audit record: expected vs actual location, outcome, resolution.

    status is computed once at insert; only resolution fields change later.
    """

    __tablename__ = "audits"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    asset_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    asset_tag: Mapped[str] = mapped_column(String, nullable=False)
    asset_name: Mapped[str | None] = mapped_column(String, nullable=True)
    sap_asset_number: Mapped[str | None] = mapped_column(String, nullable=True)
    expected_location_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    expected_location_name: Mapped[str | None] = mapped_column(String, nullable=True)
    actual_location_id: Mapped[int] = mapped_column(Integer, nullable=False)
    actual_location_name: Mapped[str] = mapped_column(String, nullable=False)
    status: Mapped[str] = mapped_column(String, nullable=False, index=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    user_name: Mapped[str | None] = mapped_column(String, nullable=True, index=True)
    snipeit_audit_posted: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=text("0")
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    resolved_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    resolved_by: Mapped[str | None] = mapped_column(String, nullable=True)
