"""initial_schema_audits

Revision ID: 3f1c2a9b7d10
Revises:
Create Date: 2026-10-17 09:00:00.000000

"""

from collections.abc import Sequence
from typing import Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f1c2a9b7d10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "audits",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("asset_id", sa.Integer(), nullable=False),
        sa.Column("asset_tag", sa.String(), nullable=False),
        sa.Column("asset_name", sa.String(), nullable=True),
        sa.Column("sap_asset_number", sa.String(), nullable=True),
        sa.Column("expected_location_id", sa.Integer(), nullable=True),
        sa.Column("expected_location_name", sa.String(), nullable=True),
        sa.Column("actual_location_id", sa.Integer(), nullable=False),
        sa.Column("actual_location_name", sa.String(), nullable=False),
        sa.Column("status", sa.String(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("user_name", sa.String(), nullable=True),
        sa.Column(
            "snipeit_audit_posted",
            sa.Boolean(),
            server_default=sa.text("0"),
            nullable=False,
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("(CURRENT_TIMESTAMP)"),
            nullable=False,
        ),
        sa.Column("resolved_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("resolved_by", sa.String(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_audits_asset_id"), "audits", ["asset_id"], unique=False)
    op.create_index(op.f("ix_audits_status"), "audits", ["status"], unique=False)
    op.create_index(op.f("ix_audits_user_name"), "audits", ["user_name"], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(op.f("ix_audits_user_name"), table_name="audits")
    op.drop_index(op.f("ix_audits_status"), table_name="audits")
    op.drop_index(op.f("ix_audits_asset_id"), table_name="audits")
    op.drop_table("audits")
