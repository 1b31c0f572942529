"""Domain layer for the WordPress bounded context."""

from wordpress.domain.value_objects import (
    LIVE_STATUSES,
    ActionStatus,
    EnqueueRequest,
    QueueEntry,
    QueueResult,
    ResourceRef,
)

__all__ = [
    "LIVE_STATUSES",
    "ActionStatus",
    "EnqueueRequest",
    "QueueEntry",
    "QueueResult",
    "ResourceRef",
]
