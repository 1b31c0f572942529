"""Pydantic models for action queue API requests and responses."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from wordpress.domain.value_objects import ActionStatus, QueueEntry, ResourceRef


class ActionResponse(BaseModel):
    """Response model for one queued action."""

    id: str = Field(..., description="Action ID (UUID)")
    website_id: str
    integration_id: str
    initiated_by: str
    action_type: str
    action_payload: dict[str, Any]
    before_state: dict[str, Any] | None = None
    after_state: dict[str, Any] | None = None
    resource_type: str | None = None
    resource_id: str | None = None
    priority: int
    status: ActionStatus
    error_message: str | None = None
    started_at: datetime | None = None
    completed_at: datetime | None = None
    created_at: datetime

    @classmethod
    def from_domain(cls, entry: QueueEntry) -> ActionResponse:
        """Convert a domain QueueEntry to API response."""
        return cls(
            id=str(entry.id),
            website_id=entry.website_id,
            integration_id=entry.integration_id,
            initiated_by=entry.initiated_by,
            action_type=entry.action_type,
            action_payload=entry.action_payload,
            before_state=entry.before_state,
            after_state=entry.after_state,
            resource_type=entry.resource_type,
            resource_id=entry.resource_id,
            priority=entry.priority,
            status=entry.status,
            error_message=entry.error_message,
            started_at=entry.started_at,
            completed_at=entry.completed_at,
            created_at=entry.created_at,
        )


class ActionHistoryResponse(BaseModel):
    """Response model for the action history of a website."""

    actions: list[ActionResponse]


class PendingActionsResponse(BaseModel):
    """Response model for in-flight actions of a website."""

    count: int = Field(..., description="Number of pending or processing actions")
    actions: list[ActionResponse] = Field(
        ..., description="In-flight actions, oldest first"
    )


class ResourceRequest(BaseModel):
    """A candidate remote resource."""

    resource_type: str = Field(..., min_length=1, max_length=255)
    resource_id: str = Field(..., min_length=1, max_length=255)

    def to_domain(self) -> ResourceRef:
        return ResourceRef(self.resource_type, self.resource_id)


class ConflictCheckRequest(BaseModel):
    """Request model for checking several resources for live actions."""

    resources: list[ResourceRequest] = Field(default_factory=list)


class ConflictCheckResponse(BaseModel):
    """Conflicting actions keyed by "resource_type:resource_id"."""

    conflicts: dict[str, ActionResponse]


class ResourceConflictResponse(BaseModel):
    """The newest live action on one resource, if any."""

    conflict: ActionResponse | None = None
