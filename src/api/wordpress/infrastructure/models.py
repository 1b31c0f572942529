"""SQLAlchemy ORM model for the WordPress action queue.

One row per attempted or completed mutation against a remote WordPress site.
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import CheckConstraint, DateTime, Index, Integer, String, Text, text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base
from wordpress.domain.value_objects import ActionStatus, QueueEntry

_STATUS_VALUES = ", ".join(f"'{status.value}'" for status in ActionStatus)


class ActionQueueModel(Base):
    """ORM model for the wp_action_queue table.

    Indexes:
    - idx_wp_action_queue_processing: per-site listing by status and age
    - idx_wp_action_queue_resource: conflict lookups on a single resource
    """

    __tablename__ = "wp_action_queue"
    __table_args__ = (
        CheckConstraint(f"status IN ({_STATUS_VALUES})", name="ck_wp_action_queue_status"),
        Index(
            "idx_wp_action_queue_processing",
            "website_id",
            "status",
            "priority",
            "created_at",
        ),
        Index(
            "idx_wp_action_queue_resource",
            "website_id",
            "resource_type",
            "resource_id",
            "status",
        ),
    )

    id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        primary_key=True,
        server_default=text("gen_random_uuid()"),
    )
    website_id: Mapped[str] = mapped_column(String(255), nullable=False)
    integration_id: Mapped[str] = mapped_column(String(255), nullable=False)
    initiated_by: Mapped[str] = mapped_column(String(255), nullable=False)
    action_type: Mapped[str] = mapped_column(String(255), nullable=False)
    action_payload: Mapped[dict] = mapped_column(JSONB, nullable=False)
    before_state: Mapped[dict | None] = mapped_column(JSONB, nullable=True)
    after_state: Mapped[dict | None] = mapped_column(JSONB, nullable=True)
    status: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        server_default=ActionStatus.PENDING.value,
    )
    error_message: Mapped[str | None] = mapped_column(Text, nullable=True)
    resource_type: Mapped[str | None] = mapped_column(String(255), nullable=True)
    resource_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
    priority: Mapped[int] = mapped_column(Integer, nullable=False, server_default="5")
    started_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    completed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=text("NOW()"),
    )

    def to_value_object(self) -> QueueEntry:
        """Convert this ORM model to a QueueEntry value object."""
        return QueueEntry(
            id=self.id,
            website_id=self.website_id,
            integration_id=self.integration_id,
            initiated_by=self.initiated_by,
            action_type=self.action_type,
            action_payload=self.action_payload,
            status=ActionStatus(self.status),
            created_at=self.created_at,
            priority=self.priority,
            before_state=self.before_state,
            after_state=self.after_state,
            resource_type=self.resource_type,
            resource_id=self.resource_id,
            error_message=self.error_message,
            started_at=self.started_at,
            completed_at=self.completed_at,
        )

    def __repr__(self) -> str:
        return (
            f"<ActionQueueModel("
            f"id={self.id}, "
            f"website_id={self.website_id}, "
            f"action_type={self.action_type}, "
            f"status={self.status}"
            f")>"
        )
