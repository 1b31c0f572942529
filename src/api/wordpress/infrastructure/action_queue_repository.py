"""PostgreSQL implementation of IActionQueueRepository.

Issues exactly four statement shapes: insert returning the id, update by id,
filtered select with ordering/limit, and a filtered count. The repository
only executes statements; it never commits.
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from wordpress.domain.value_objects import (
    LIVE_STATUSES,
    ActionStatus,
    EnqueueRequest,
    QueueEntry,
    ResourceRef,
)
from wordpress.infrastructure.models import ActionQueueModel
from wordpress.ports.repositories import IActionQueueRepository

_LIVE = sorted(status.value for status in LIVE_STATUSES)


class ActionQueueRepository(IActionQueueRepository):
    """Repository for the wp_action_queue table.

    Terminal transitions are guarded by the live-status filter, so the first
    of complete/fail wins and later calls update nothing.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository with a session.

        Args:
            session: The SQLAlchemy async session (shared with calling service)
        """
        self._session = session

    async def insert(
        self,
        request: EnqueueRequest,
        priority: int,
        started_at: datetime | None,
    ) -> UUID:
        stmt = (
            insert(ActionQueueModel)
            .values(
                website_id=request.website_id,
                integration_id=request.integration_id,
                initiated_by=request.initiated_by,
                action_type=request.action_type,
                action_payload=request.action_payload,
                before_state=request.before_state,
                resource_type=request.resource_type,
                resource_id=request.resource_id,
                priority=priority,
                status=request.status.value,
                started_at=started_at,
            )
            .returning(ActionQueueModel.id)
        )

        result = await self._session.execute(stmt)
        return result.scalar_one()

    async def mark_completed(
        self,
        action_id: UUID,
        after_state: dict | None,
        completed_at: datetime,
    ) -> bool:
        return await self._resolve(
            action_id,
            status=ActionStatus.COMPLETED.value,
            after_state=after_state,
            completed_at=completed_at,
        )

    async def mark_failed(
        self,
        action_id: UUID,
        error_message: str,
        completed_at: datetime,
    ) -> bool:
        return await self._resolve(
            action_id,
            status=ActionStatus.FAILED.value,
            error_message=error_message,
            completed_at=completed_at,
        )

    async def _resolve(self, action_id: UUID, **values: object) -> bool:
        stmt = (
            update(ActionQueueModel)
            .where(ActionQueueModel.id == action_id)
            .where(ActionQueueModel.status.in_(_LIVE))
            .values(**values)
        )

        result = await self._session.execute(stmt)
        return result.rowcount > 0

    async def find_live_for_resource(
        self, website_id: str, resource: ResourceRef
    ) -> QueueEntry | None:
        stmt = (
            select(ActionQueueModel)
            .where(ActionQueueModel.website_id == website_id)
            .where(ActionQueueModel.resource_type == resource.resource_type)
            .where(ActionQueueModel.resource_id == resource.resource_id)
            .where(ActionQueueModel.status.in_(_LIVE))
            .order_by(ActionQueueModel.created_at.desc())
            .limit(1)
        )

        result = await self._session.execute(stmt)
        model = result.scalars().first()

        if model is None:
            return None

        return model.to_value_object()

    async def list_live(
        self, website_id: str, newest_first: bool = True
    ) -> list[QueueEntry]:
        order = (
            ActionQueueModel.created_at.desc()
            if newest_first
            else ActionQueueModel.created_at.asc()
        )
        stmt = (
            select(ActionQueueModel)
            .where(ActionQueueModel.website_id == website_id)
            .where(ActionQueueModel.status.in_(_LIVE))
            .order_by(order)
        )

        result = await self._session.execute(stmt)
        return [model.to_value_object() for model in result.scalars().all()]

    async def count_live(self, website_id: str) -> int:
        stmt = (
            select(func.count())
            .select_from(ActionQueueModel)
            .where(ActionQueueModel.website_id == website_id)
            .where(ActionQueueModel.status.in_(_LIVE))
        )

        result = await self._session.execute(stmt)
        return result.scalar_one()

    async def list_recent(self, website_id: str, limit: int) -> list[QueueEntry]:
        stmt = (
            select(ActionQueueModel)
            .where(ActionQueueModel.website_id == website_id)
            .order_by(ActionQueueModel.created_at.desc())
            .limit(limit)
        )

        result = await self._session.execute(stmt)
        return [model.to_value_object() for model in result.scalars().all()]
