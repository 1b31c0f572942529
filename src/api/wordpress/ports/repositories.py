"""Repository protocols (ports) for the WordPress bounded context.

The action queue repository is the persistence collaborator of the tracker.
Implementations never commit; the calling service owns the transaction
boundary.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol, runtime_checkable
from uuid import UUID

from wordpress.domain.value_objects import EnqueueRequest, QueueEntry, ResourceRef


@runtime_checkable
class IActionQueueRepository(Protocol):
    """Repository for action queue entries."""

    async def insert(
        self,
        request: EnqueueRequest,
        priority: int,
        started_at: datetime | None,
    ) -> UUID:
        """Insert a new entry and return its database-assigned id.

        Args:
            request: What is about to be done, and to which resource
            priority: Resolved priority to store
            started_at: Set for entries created already processing
        """
        ...

    async def mark_completed(
        self,
        action_id: UUID,
        after_state: dict | None,
        completed_at: datetime,
    ) -> bool:
        """Move a live entry to completed.

        Returns:
            True if a live entry was updated, False if the id is unknown or
            the entry already reached a terminal status
        """
        ...

    async def mark_failed(
        self,
        action_id: UUID,
        error_message: str,
        completed_at: datetime,
    ) -> bool:
        """Move a live entry to failed.

        Returns:
            True if a live entry was updated, False otherwise
        """
        ...

    async def find_live_for_resource(
        self, website_id: str, resource: ResourceRef
    ) -> QueueEntry | None:
        """Return the most recently created live entry for a resource."""
        ...

    async def list_live(
        self, website_id: str, newest_first: bool = True
    ) -> list[QueueEntry]:
        """Return every live entry of a website ordered by creation time."""
        ...

    async def count_live(self, website_id: str) -> int:
        """Count live entries of a website."""
        ...

    async def list_recent(self, website_id: str, limit: int) -> list[QueueEntry]:
        """Return the newest entries of a website regardless of status."""
        ...
