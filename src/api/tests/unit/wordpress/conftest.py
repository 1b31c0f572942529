"""Fixtures for the WordPress bounded context unit tests."""

from __future__ import annotations

from dataclasses import replace
from datetime import UTC, datetime, timedelta
from uuid import UUID, uuid4

import pytest

from infrastructure.settings import ActionQueueSettings
from wordpress.application.services import ActionQueueService
from wordpress.domain.value_objects import (
    LIVE_STATUSES,
    ActionStatus,
    EnqueueRequest,
    QueueEntry,
    ResourceRef,
)

WEBSITE_ID = "site-acme"
OTHER_WEBSITE_ID = "site-globex"


class InMemoryActionQueueRepository:
    """In-memory stand-in for the action queue table.

    Assigns strictly increasing created_at values so ordering is
    deterministic. Set ``error`` to make every call raise it.
    """

    def __init__(self) -> None:
        self.rows: dict[UUID, QueueEntry] = {}
        self.error: Exception | None = None
        self.calls: list[str] = []
        self._clock = datetime(2026, 10, 1, 9, 0, 0, tzinfo=UTC)

    def _record(self, name: str) -> None:
        self.calls.append(name)
        if self.error is not None:
            raise self.error

    async def insert(self, request: EnqueueRequest, priority, started_at) -> UUID:
        self._record("insert")
        self._clock += timedelta(seconds=1)
        entry = QueueEntry(
            id=uuid4(),
            website_id=request.website_id,
            integration_id=request.integration_id,
            initiated_by=request.initiated_by,
            action_type=request.action_type,
            action_payload=request.action_payload,
            status=request.status,
            created_at=self._clock,
            priority=priority,
            before_state=request.before_state,
            resource_type=request.resource_type,
            resource_id=request.resource_id,
            started_at=started_at,
        )
        self.rows[entry.id] = entry
        return entry.id

    def _resolve(self, action_id: UUID, **changes) -> bool:
        entry = self.rows.get(action_id)
        if entry is None or entry.status not in LIVE_STATUSES:
            return False
        self.rows[action_id] = replace(entry, **changes)
        return True

    async def mark_completed(self, action_id, after_state, completed_at) -> bool:
        self._record("mark_completed")
        return self._resolve(
            action_id,
            status=ActionStatus.COMPLETED,
            after_state=after_state,
            completed_at=completed_at,
        )

    async def mark_failed(self, action_id, error_message, completed_at) -> bool:
        self._record("mark_failed")
        return self._resolve(
            action_id,
            status=ActionStatus.FAILED,
            error_message=error_message,
            completed_at=completed_at,
        )

    def _live(self, website_id: str) -> list[QueueEntry]:
        return [
            entry
            for entry in self.rows.values()
            if entry.website_id == website_id and entry.is_live
        ]

    async def find_live_for_resource(self, website_id, resource: ResourceRef):
        self._record("find_live_for_resource")
        matches = [e for e in self._live(website_id) if e.resource == resource]
        if not matches:
            return None
        return max(matches, key=lambda e: e.created_at)

    async def list_live(self, website_id, newest_first=True):
        self._record("list_live")
        return sorted(
            self._live(website_id), key=lambda e: e.created_at, reverse=newest_first
        )

    async def count_live(self, website_id) -> int:
        self._record("count_live")
        return len(self._live(website_id))

    async def list_recent(self, website_id, limit):
        self._record("list_recent")
        entries = [e for e in self.rows.values() if e.website_id == website_id]
        return sorted(entries, key=lambda e: e.created_at, reverse=True)[:limit]


@pytest.fixture
def repository() -> InMemoryActionQueueRepository:
    return InMemoryActionQueueRepository()


@pytest.fixture
def queue_settings() -> ActionQueueSettings:
    return ActionQueueSettings(default_priority=5, history_limit=100)


@pytest.fixture
def service(repository, mock_session, queue_settings) -> ActionQueueService:
    """ActionQueueService backed by the in-memory repository."""
    return ActionQueueService(
        repository=repository,
        session=mock_session,
        settings=queue_settings,
    )


@pytest.fixture
def make_request():
    """Build EnqueueRequest instances with sensible defaults."""

    def _make(**overrides) -> EnqueueRequest:
        values = {
            "website_id": WEBSITE_ID,
            "integration_id": "integration-1",
            "initiated_by": "admin-1",
            "action_type": "update_page",
            "action_payload": {"field": "title", "value": "New title"},
        }
        values.update(overrides)
        return EnqueueRequest(**values)

    return _make
