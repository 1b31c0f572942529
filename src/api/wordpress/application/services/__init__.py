"""Application services for the WordPress bounded context."""

from wordpress.application.services.action_queue_service import (
    ActionQueueService,
    TrackedAction,
)

__all__ = ["ActionQueueService", "TrackedAction"]
