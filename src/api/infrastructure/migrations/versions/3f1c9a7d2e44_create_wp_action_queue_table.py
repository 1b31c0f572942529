"""create_wp_action_queue_table

Create the wp_action_queue table journalling mutations against remote
WordPress sites, with the indexes used for per-site listings and
resource conflict lookups.

Revision ID: 3f1c9a7d2e44
Revises:
Create Date: 2026-10-18 09:12:41.502113

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3f1c9a7d2e44"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "wp_action_queue",
        sa.Column(
            "id",
            sa.UUID(),
            nullable=False,
            server_default=sa.text("gen_random_uuid()"),
        ),
        sa.Column("website_id", sa.String(length=255), nullable=False),
        sa.Column("integration_id", sa.String(length=255), nullable=False),
        sa.Column("initiated_by", sa.String(length=255), nullable=False),
        sa.Column(
            "action_type", sa.String(length=255), nullable=False
        ),  # e.g., "toggle_plugin"
        sa.Column("action_payload", postgresql.JSONB(), nullable=False),
        sa.Column("before_state", postgresql.JSONB(), nullable=True),
        sa.Column("after_state", postgresql.JSONB(), nullable=True),
        sa.Column(
            "status",
            sa.String(length=32),
            nullable=False,
            server_default="pending",
        ),
        sa.Column("error_message", sa.Text(), nullable=True),
        sa.Column(
            "resource_type", sa.String(length=255), nullable=True
        ),  # NULL for actions without a single target
        sa.Column("resource_id", sa.String(length=255), nullable=True),
        sa.Column("priority", sa.Integer(), nullable=False, server_default="5"),
        sa.Column("started_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "status IN ('pending', 'processing', 'completed', 'failed', 'rolled_back')",
            name="ck_wp_action_queue_status",
        ),
    )
    op.create_index(
        "idx_wp_action_queue_processing",
        "wp_action_queue",
        ["website_id", "status", "priority", "created_at"],
        unique=False,
    )
    op.create_index(
        "idx_wp_action_queue_resource",
        "wp_action_queue",
        ["website_id", "resource_type", "resource_id", "status"],
        unique=False,
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_wp_action_queue_resource", table_name="wp_action_queue")
    op.drop_index("idx_wp_action_queue_processing", table_name="wp_action_queue")
    op.drop_table("wp_action_queue")
