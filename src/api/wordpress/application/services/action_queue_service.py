"""Action queue application service.

Journals mutations against remote WordPress sites and answers "is anyone
else touching this resource right now?". The queue is advisory: nothing
here prevents two callers from both seeing no conflict and both going
ahead.

Bookkeeping must never block the remote operation it describes, so every
persistence error is reported through the probe and turned into a degraded
result instead of an exception.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Iterable
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from dataclasses import dataclass, replace
from datetime import UTC, datetime
from typing import Any
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.settings import ActionQueueSettings, get_action_queue_settings
from wordpress.application.observability import (
    ActionQueueProbe,
    DefaultActionQueueProbe,
)
from wordpress.domain.value_objects import (
    ActionStatus,
    EnqueueRequest,
    QueueEntry,
    QueueResult,
    ResourceRef,
)
from wordpress.ports.repositories import IActionQueueRepository

PERSISTENCE_ERRORS: tuple[type[Exception], ...] = (SQLAlchemyError, OSError)


@dataclass
class TrackedAction:
    """Handle yielded by ActionQueueService.track().

    Set after_state inside the block to have it stored on completion.
    action_id is None when the entry could not be recorded.
    """

    action_id: UUID | None
    after_state: dict[str, Any] | None = None

    @property
    def is_recorded(self) -> bool:
        return self.action_id is not None


class ActionQueueService:
    """Application service for the WordPress action queue.

    Each operation runs in its own short transaction on the injected
    session (a savepoint if the caller already holds a transaction).
    """

    def __init__(
        self,
        repository: IActionQueueRepository,
        session: AsyncSession,
        probe: ActionQueueProbe | None = None,
        settings: ActionQueueSettings | None = None,
    ):
        """Initialize ActionQueueService with dependencies.

        Args:
            repository: Persistence for queue entries
            session: Database session for transaction management
            probe: Optional domain probe for observability
            settings: Optional queue settings (defaults to environment)
        """
        self._repository = repository
        self._session = session
        self._probe = probe or DefaultActionQueueProbe()
        self._settings = settings or get_action_queue_settings()

    def _transaction(self) -> AbstractAsyncContextManager[Any]:
        if self._session.in_transaction():
            return self._session.begin_nested()
        return self._session.begin()

    @staticmethod
    def _now() -> datetime:
        return datetime.now(UTC)

    # Transitions

    async def enqueue(self, request: EnqueueRequest) -> QueueResult:
        """Record a new action.

        Entries created as PROCESSING get started_at stamped now; PENDING
        entries leave it unset.

        Args:
            request: The action about to be performed

        Returns:
            QueueResult with the new action id, or success=False and the
            error message if the row could not be written
        """
        started_at = self._now() if request.status is ActionStatus.PROCESSING else None
        priority = (
            request.priority
            if request.priority is not None
            else self._settings.default_priority
        )

        try:
            async with self._transaction():
                action_id = await self._repository.insert(
                    request, priority=priority, started_at=started_at
                )
        except PERSISTENCE_ERRORS as e:
            self._probe.enqueue_failed(
                website_id=request.website_id,
                action_type=request.action_type,
                error=str(e),
            )
            return QueueResult.failed(str(e) or "Failed to enqueue")

        self._probe.action_enqueued(
            action_id=action_id,
            website_id=request.website_id,
            action_type=request.action_type,
            status=request.status.value,
        )
        return QueueResult.ok(action_id)

    async def complete(
        self,
        action_id: UUID | None,
        after_state: dict[str, Any] | None = None,
    ) -> None:
        """Mark a live action as completed.

        Unknown ids, None, and already resolved actions are silent no-ops.

        Args:
            action_id: Id returned by enqueue
            after_state: Snapshot of the resource after the mutation
        """
        if action_id is None:
            self._probe.transition_skipped(None, ActionStatus.COMPLETED.value)
            return

        try:
            async with self._transaction():
                updated = await self._repository.mark_completed(
                    action_id, after_state=after_state, completed_at=self._now()
                )
        except PERSISTENCE_ERRORS as e:
            self._probe.transition_error(action_id, ActionStatus.COMPLETED.value, str(e))
            return

        if updated:
            self._probe.action_completed(action_id)
        else:
            self._probe.transition_skipped(action_id, ActionStatus.COMPLETED.value)

    async def fail(self, action_id: UUID | None, error_message: str) -> None:
        """Mark a live action as failed.

        Same no-op semantics as complete().

        Args:
            action_id: Id returned by enqueue
            error_message: Why the remote operation failed
        """
        if action_id is None:
            self._probe.transition_skipped(None, ActionStatus.FAILED.value)
            return

        try:
            async with self._transaction():
                updated = await self._repository.mark_failed(
                    action_id, error_message=error_message, completed_at=self._now()
                )
        except PERSISTENCE_ERRORS as e:
            self._probe.transition_error(action_id, ActionStatus.FAILED.value, str(e))
            return

        if updated:
            self._probe.action_failed(action_id, error_message)
        else:
            self._probe.transition_skipped(action_id, ActionStatus.FAILED.value)

    @asynccontextmanager
    async def track(self, request: EnqueueRequest) -> AsyncIterator[TrackedAction]:
        """Wrap a remote operation with enqueue/complete/fail bookkeeping.

        The action is recorded as processing since the block runs right
        away. A normal exit completes it with handle.after_state; an
        exception fails it with the exception message and propagates.

        Usage:
            async with service.track(request) as action:
                action.after_state = await client.clear_cache()
        """
        if request.status is not ActionStatus.PROCESSING:
            request = replace(request, status=ActionStatus.PROCESSING)

        result = await self.enqueue(request)
        handle = TrackedAction(action_id=result.action_id)

        try:
            yield handle
        except Exception as e:
            await self.fail(handle.action_id, str(e) or type(e).__name__)
            raise

        await self.complete(handle.action_id, handle.after_state)

    # Conflict detection

    async def check_resource_conflict(
        self, website_id: str, resource_type: str, resource_id: str
    ) -> QueueEntry | None:
        """Return the newest live action on a resource, or None.

        A point-in-time check, not a lock. Read failures report no conflict.
        """
        resource = ResourceRef(resource_type, resource_id)

        try:
            async with self._transaction():
                conflict = await self._repository.find_live_for_resource(
                    website_id, resource
                )
        except PERSISTENCE_ERRORS as e:
            self._probe.read_failed("check_resource_conflict", website_id, str(e))
            return None

        if conflict is not None:
            self._probe.conflict_detected(website_id, resource.key, conflict.id)
        return conflict

    async def check_batch_conflicts(
        self,
        website_id: str,
        resources: Iterable[ResourceRef],
    ) -> dict[str, QueueEntry]:
        """Find live actions for several candidate resources at once.

        Loads the website's live actions in a single query, newest first,
        and matches them in memory.

        Returns:
            Map of "type:id" to the newest conflicting action. Resources
            without a conflict are absent.
        """
        candidates = list(resources)
        conflicts: dict[str, QueueEntry] = {}

        if not candidates:
            return conflicts

        try:
            async with self._transaction():
                live = await self._repository.list_live(website_id, newest_first=True)
        except PERSISTENCE_ERRORS as e:
            self._probe.read_failed("check_batch_conflicts", website_id, str(e))
            return conflicts

        newest_by_resource: dict[ResourceRef, QueueEntry] = {}
        for entry in live:
            resource = entry.resource
            if resource is not None and resource not in newest_by_resource:
                newest_by_resource[resource] = entry

        for candidate in candidates:
            conflict = newest_by_resource.get(candidate)
            if conflict is not None:
                conflicts[candidate.key] = conflict

        self._probe.batch_conflicts_checked(website_id, len(candidates), len(conflicts))
        return conflicts

    # Reporting

    async def get_pending_action_count(self, website_id: str) -> int:
        """Count pending and processing actions of a website (0 on error)."""
        try:
            async with self._transaction():
                return await self._repository.count_live(website_id)
        except PERSISTENCE_ERRORS as e:
            self._probe.read_failed("get_pending_action_count", website_id, str(e))
            return 0

    async def list_live_actions(self, website_id: str) -> list[QueueEntry]:
        """In-flight actions of a website, oldest first ([] on error)."""
        try:
            async with self._transaction():
                return await self._repository.list_live(website_id, newest_first=False)
        except PERSISTENCE_ERRORS as e:
            self._probe.read_failed("list_live_actions", website_id, str(e))
            return []

    async def list_recent_actions(
        self, website_id: str, limit: int | None = None
    ) -> list[QueueEntry]:
        """Action history of a website, newest first ([] on error).

        Args:
            website_id: Website to list
            limit: Maximum number of entries (defaults to the configured
                history limit)
        """
        if limit is None:
            limit = self._settings.history_limit

        try:
            async with self._transaction():
                return await self._repository.list_recent(website_id, limit)
        except PERSISTENCE_ERRORS as e:
            self._probe.read_failed("list_recent_actions", website_id, str(e))
            return []
