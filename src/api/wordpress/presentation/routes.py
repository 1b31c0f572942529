"""HTTP routes for the WordPress action queue.

Read-only views used by the admin dashboard. Queue bookkeeping degrades
to empty results on persistence errors, so these routes never fail
because the queue table is unavailable.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from wordpress.application.services import ActionQueueService
from wordpress.dependencies import get_action_queue_service
from wordpress.presentation.models import (
    ActionHistoryResponse,
    ActionResponse,
    ConflictCheckRequest,
    ConflictCheckResponse,
    PendingActionsResponse,
    ResourceConflictResponse,
)

router = APIRouter(
    prefix="/wordpress/{website_id}/actions",
    tags=["wordpress"],
)


@router.get("")
async def list_actions(
    website_id: str,
    service: Annotated[ActionQueueService, Depends(get_action_queue_service)],
    limit: Annotated[int | None, Query(ge=1, le=1000)] = None,
) -> ActionHistoryResponse:
    """List the most recent actions of a website, newest first.

    Args:
        website_id: Website identifier
        service: Action queue service
        limit: Maximum number of actions (defaults to the configured
            history limit)
    """
    entries = await service.list_recent_actions(website_id, limit=limit)
    return ActionHistoryResponse(
        actions=[ActionResponse.from_domain(entry) for entry in entries]
    )


@router.get("/pending")
async def list_pending_actions(
    website_id: str,
    service: Annotated[ActionQueueService, Depends(get_action_queue_service)],
) -> PendingActionsResponse:
    """Report the operations in flight on a website.

    The count is taken from the listed entries so both come from one read.
    """
    entries = await service.list_live_actions(website_id)
    return PendingActionsResponse(
        count=len(entries),
        actions=[ActionResponse.from_domain(entry) for entry in entries],
    )


@router.post("/conflicts")
async def check_conflicts(
    website_id: str,
    request: ConflictCheckRequest,
    service: Annotated[ActionQueueService, Depends(get_action_queue_service)],
) -> ConflictCheckResponse:
    """Check candidate resources for actions already in flight.

    Resources without a conflicting action are absent from the response.
    """
    conflicts = await service.check_batch_conflicts(
        website_id,
        [resource.to_domain() for resource in request.resources],
    )
    return ConflictCheckResponse(
        conflicts={
            key: ActionResponse.from_domain(entry) for key, entry in conflicts.items()
        }
    )


@router.get("/conflicts/{resource_type}/{resource_id}")
async def check_resource_conflict(
    website_id: str,
    resource_type: str,
    resource_id: str,
    service: Annotated[ActionQueueService, Depends(get_action_queue_service)],
) -> ResourceConflictResponse:
    """Return the action currently touching one resource, if any."""
    conflict = await service.check_resource_conflict(
        website_id, resource_type, resource_id
    )
    if conflict is None:
        return ResourceConflictResponse()
    return ResourceConflictResponse(conflict=ActionResponse.from_domain(conflict))
