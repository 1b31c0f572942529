"""Protocol for action queue observability.

Defines the interface for domain probes that capture the lifecycle of
queued WordPress actions and the degradations of the bookkeeping itself.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol
from uuid import UUID

import structlog

if TYPE_CHECKING:
    from infrastructure.observability.context import ObservationContext


class ActionQueueProbe(Protocol):
    """Domain probe for action queue operations."""

    def action_enqueued(
        self, action_id: UUID, website_id: str, action_type: str, status: str
    ) -> None:
        """Record that an action was written to the queue."""
        ...

    def enqueue_failed(self, website_id: str, action_type: str, error: str) -> None:
        """Record that the queue row could not be written."""
        ...

    def action_completed(self, action_id: UUID) -> None:
        """Record that an action reached the completed status."""
        ...

    def action_failed(self, action_id: UUID, error_message: str) -> None:
        """Record that an action reached the failed status."""
        ...

    def transition_skipped(self, action_id: UUID | None, target_status: str) -> None:
        """Record a complete/fail that matched no live entry."""
        ...

    def transition_error(self, action_id: UUID, target_status: str, error: str) -> None:
        """Record a complete/fail that could not be persisted."""
        ...

    def conflict_detected(
        self, website_id: str, resource_key: str, conflicting_action_id: UUID
    ) -> None:
        """Record that a live entry already targets a resource."""
        ...

    def batch_conflicts_checked(
        self, website_id: str, candidate_count: int, conflict_count: int
    ) -> None:
        """Record the outcome of a batch conflict check."""
        ...

    def read_failed(self, operation: str, website_id: str, error: str) -> None:
        """Record a read that degraded to an empty result."""
        ...

    def with_context(self, context: ObservationContext) -> ActionQueueProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultActionQueueProbe:
    """Default implementation of ActionQueueProbe using structlog.

    Event fields take precedence over bound context metadata, so a context
    carrying website_id never clashes with an explicit one.
    """

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _fields(self, **fields: Any) -> dict[str, Any]:
        if self._context is None:
            return fields
        return {**self._context.as_dict(), **fields}

    def with_context(self, context: ObservationContext) -> DefaultActionQueueProbe:
        """Create a new probe with observation context bound."""
        return DefaultActionQueueProbe(logger=self._logger, context=context)

    def action_enqueued(
        self, action_id: UUID, website_id: str, action_type: str, status: str
    ) -> None:
        self._logger.info(
            "wp_action_enqueued",
            **self._fields(
                action_id=str(action_id),
                website_id=website_id,
                action_type=action_type,
                status=status,
            ),
        )

    def enqueue_failed(self, website_id: str, action_type: str, error: str) -> None:
        self._logger.warning(
            "wp_action_enqueue_failed",
            **self._fields(website_id=website_id, action_type=action_type, error=error),
        )

    def action_completed(self, action_id: UUID) -> None:
        self._logger.info(
            "wp_action_completed",
            **self._fields(action_id=str(action_id)),
        )

    def action_failed(self, action_id: UUID, error_message: str) -> None:
        self._logger.info(
            "wp_action_failed",
            **self._fields(action_id=str(action_id), error_message=error_message),
        )

    def transition_skipped(self, action_id: UUID | None, target_status: str) -> None:
        """Not an error: unknown ids and already resolved entries are no-ops."""
        self._logger.debug(
            "wp_action_transition_skipped",
            **self._fields(
                action_id=str(action_id) if action_id is not None else None,
                target_status=target_status,
            ),
        )

    def transition_error(self, action_id: UUID, target_status: str, error: str) -> None:
        self._logger.warning(
            "wp_action_transition_error",
            **self._fields(
                action_id=str(action_id),
                target_status=target_status,
                error=error,
            ),
        )

    def conflict_detected(
        self, website_id: str, resource_key: str, conflicting_action_id: UUID
    ) -> None:
        self._logger.info(
            "wp_action_conflict_detected",
            **self._fields(
                website_id=website_id,
                resource=resource_key,
                conflicting_action_id=str(conflicting_action_id),
            ),
        )

    def batch_conflicts_checked(
        self, website_id: str, candidate_count: int, conflict_count: int
    ) -> None:
        self._logger.debug(
            "wp_action_batch_conflicts_checked",
            **self._fields(
                website_id=website_id,
                candidate_count=candidate_count,
                conflict_count=conflict_count,
            ),
        )

    def read_failed(self, operation: str, website_id: str, error: str) -> None:
        self._logger.warning(
            "wp_action_queue_read_failed",
            **self._fields(operation=operation, website_id=website_id, error=error),
        )
