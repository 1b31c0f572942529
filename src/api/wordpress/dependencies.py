"""FastAPI dependency providers for the WordPress bounded context."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.database.dependencies import get_session
from wordpress.application.observability import (
    ActionQueueProbe,
    DefaultActionQueueProbe,
)
from wordpress.application.services import ActionQueueService
from wordpress.infrastructure.action_queue_repository import ActionQueueRepository


def get_action_queue_probe() -> ActionQueueProbe:
    """Get ActionQueueProbe instance."""
    return DefaultActionQueueProbe()


def get_action_queue_repository(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> ActionQueueRepository:
    """Get ActionQueueRepository bound to the request session."""
    return ActionQueueRepository(session=session)


def get_action_queue_service(
    repository: Annotated[ActionQueueRepository, Depends(get_action_queue_repository)],
    session: Annotated[AsyncSession, Depends(get_session)],
    probe: Annotated[ActionQueueProbe, Depends(get_action_queue_probe)],
) -> ActionQueueService:
    """Get ActionQueueService instance.

    Args:
        repository: Action queue repository (shares session via FastAPI
            dependency caching)
        session: Database session for transaction management
        probe: Action queue probe for observability

    Returns:
        ActionQueueService instance
    """
    return ActionQueueService(repository=repository, session=session, probe=probe)
