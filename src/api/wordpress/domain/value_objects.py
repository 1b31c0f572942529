"""Value objects for the WordPress action queue.

A queue entry journals one attempted mutation against a remote WordPress
site. Entries are immutable snapshots of a row; transitions happen in the
database, never on these objects.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from typing import Any
from uuid import UUID


class ActionStatus(StrEnum):
    """Lifecycle status of a queue entry.

    ROLLED_BACK is part of the stored vocabulary but no tracker operation
    moves an entry into it.
    """

    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"
    ROLLED_BACK = "rolled_back"

    @property
    def is_live(self) -> bool:
        """True while the entry can still conflict with new work."""
        return self in LIVE_STATUSES


LIVE_STATUSES: frozenset[ActionStatus] = frozenset(
    {ActionStatus.PENDING, ActionStatus.PROCESSING}
)


@dataclass(frozen=True)
class ResourceRef:
    """A specific remote object that can be the target of contention.

    Attributes:
        resource_type: Kind of remote object (e.g. "page", "plugin")
        resource_id: Identifier of the object on the remote site
    """

    resource_type: str
    resource_id: str

    @property
    def key(self) -> str:
        """Map key used by batch conflict checks ("type:id")."""
        return f"{self.resource_type}:{self.resource_id}"

    def __str__(self) -> str:
        return self.key


@dataclass(frozen=True)
class EnqueueRequest:
    """Input for recording a new remote mutation.

    Only PENDING and PROCESSING are accepted as initial status. An entry
    created as PROCESSING gets its started_at stamped at insertion.
    """

    website_id: str
    integration_id: str
    initiated_by: str
    action_type: str
    action_payload: dict[str, Any]
    before_state: dict[str, Any] | None = None
    resource_type: str | None = None
    resource_id: str | None = None
    priority: int | None = None
    status: ActionStatus = ActionStatus.PENDING

    def __post_init__(self) -> None:
        object.__setattr__(self, "status", ActionStatus(self.status))
        if not self.action_type:
            raise ValueError("action_type must not be empty")
        if self.status not in LIVE_STATUSES:
            raise ValueError(
                f"Actions can only be enqueued as pending or processing, got {self.status}"
            )
        if (self.resource_type is None) != (self.resource_id is None):
            raise ValueError("resource_type and resource_id must be given together")

    @property
    def resource(self) -> ResourceRef | None:
        """The contention domain of this action, if it targets one."""
        if self.resource_type is None or self.resource_id is None:
            return None
        return ResourceRef(self.resource_type, self.resource_id)


@dataclass(frozen=True)
class QueueEntry:
    """Snapshot of one row of the action queue.

    Attributes:
        id: Identifier assigned by the database
        website_id: Remote site the action targets
        integration_id: Connection/credential set used for the call
        initiated_by: Identity of the requester (audit only)
        action_type: Free-form operation tag (e.g. "toggle_plugin")
        action_payload: Structured input describing the requested change
        status: Lifecycle status
        created_at: Insertion time, used for conflict ordering
        priority: Metadata only, not used for ordering
        before_state: Resource state before the mutation
        after_state: Resource state after the mutation
        resource_type: Kind of remote object mutated, if any
        resource_id: Identifier of the remote object, if any
        error_message: Set only when status is FAILED
        started_at: Set at insertion for entries created as PROCESSING
        completed_at: Set by the terminal transition
    """

    id: UUID
    website_id: str
    integration_id: str
    initiated_by: str
    action_type: str
    action_payload: dict[str, Any]
    status: ActionStatus
    created_at: datetime
    priority: int = 5
    before_state: dict[str, Any] | None = None
    after_state: dict[str, Any] | None = None
    resource_type: str | None = None
    resource_id: str | None = None
    error_message: str | None = None
    started_at: datetime | None = None
    completed_at: datetime | None = None

    @property
    def is_live(self) -> bool:
        return self.status.is_live

    @property
    def resource(self) -> ResourceRef | None:
        if self.resource_type is None or self.resource_id is None:
            return None
        return ResourceRef(self.resource_type, self.resource_id)


@dataclass(frozen=True)
class QueueResult:
    """Outcome of an enqueue.

    On failure action_id is None and error carries the reason. Callers decide
    whether to go ahead with the remote mutation unbooked.
    """

    action_id: UUID | None
    success: bool
    error: str | None = None

    @classmethod
    def ok(cls, action_id: UUID) -> QueueResult:
        return cls(action_id=action_id, success=True)

    @classmethod
    def failed(cls, error: str) -> QueueResult:
        return cls(action_id=None, success=False, error=error)
