"""Infrastructure layer for the WordPress bounded context."""

from wordpress.infrastructure.action_queue_repository import ActionQueueRepository
from wordpress.infrastructure.models import ActionQueueModel

__all__ = ["ActionQueueModel", "ActionQueueRepository"]
